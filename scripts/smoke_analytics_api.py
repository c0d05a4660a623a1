"""
Manual smoke runner for the OwnerLens analytics endpoints.

Usage:
    python scripts/smoke_analytics_api.py
    python scripts/smoke_analytics_api.py --base-url http://127.0.0.1:8000
"""

from __future__ import annotations

import argparse
import json
from urllib import error, parse, request


DEV_BUSINESS_ID = "11111111-1111-1111-1111-111111111111"
DEV_BUSINESS_TYPE = "retailer"
DEV_BRANCH_ID = "main"


def _call(*, method: str, url: str) -> tuple[int, str, str]:
    req = request.Request(url=url, method=method)
    try:
        with request.urlopen(req) as response:
            return (
                response.status,
                response.headers.get("Content-Type", ""),
                response.read().decode("utf-8"),
            )
    except error.HTTPError as exc:
        return exc.code, exc.headers.get("Content-Type", ""), exc.read().decode("utf-8")


def _print_case(label: str, status: int, content_type: str, body: str) -> None:
    print(f"\n[{label}] status={status}")
    if content_type.startswith("application/json"):
        print(json.dumps(json.loads(body), indent=2, sort_keys=True))
    else:
        print(body)


def _url(api: str, path: str, **params: str) -> str:
    return f"{api}/{path}?{parse.urlencode(params)}"


def run(base_url: str) -> None:
    api = base_url.rstrip("/") + "/v1/analytics"

    cases = (
        (
            "missing-business-type",
            "GET",
            _url(api, "report", business_id=DEV_BUSINESS_ID),
        ),
        (
            "invalid-window",
            "GET",
            _url(
                api,
                "report",
                business_id=DEV_BUSINESS_ID,
                business_type=DEV_BUSINESS_TYPE,
                start="2024-02-01",
                end="2024-01-01",
            ),
        ),
        (
            "unknown-range",
            "GET",
            _url(
                api,
                "report",
                business_id=DEV_BUSINESS_ID,
                business_type=DEV_BUSINESS_TYPE,
                range="last_decade",
            ),
        ),
        (
            "method-not-allowed",
            "POST",
            _url(api, "report", business_id=DEV_BUSINESS_ID),
        ),
        (
            "trailing-30-days",
            "GET",
            _url(
                api,
                "report",
                business_id=DEV_BUSINESS_ID,
                business_type=DEV_BUSINESS_TYPE,
                range="last_30_days",
            ),
        ),
        (
            "branch-report",
            "GET",
            _url(
                api,
                "report",
                business_id=DEV_BUSINESS_ID,
                business_type=DEV_BUSINESS_TYPE,
                branch_id=DEV_BRANCH_ID,
                range="last_3_months",
            ),
        ),
        (
            "csv-export",
            "GET",
            _url(
                api,
                "report.csv",
                business_id=DEV_BUSINESS_ID,
                business_type=DEV_BUSINESS_TYPE,
                range="last_year",
            ),
        ),
    )
    for label, method, url in cases:
        status, content_type, body = _call(method=method, url=url)
        _print_case(label, status, content_type, body)


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:8000",
        help="Server base URL.",
    )
    args = parser.parse_args()
    run(args.base_url)


if __name__ == "__main__":
    main()
