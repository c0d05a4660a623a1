"""
OwnerLens Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("analytics/report", views.analytics_report_view),
    path("analytics/report.csv", views.analytics_report_csv_view),
]
