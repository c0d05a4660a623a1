"""
OwnerLens Analytics Engine — Errors
=====================================
Failures are caller errors (malformed window, corrupt record).
They are local to one report computation and never retried.

Divide-by-zero situations (no prior history, no revenue) are NOT
errors; they resolve to defined zero results.
"""


class AnalyticsError(Exception):
    """Base error for all analytics failures."""

    code = "ANALYTICS_ERROR"


class InvalidWindow(AnalyticsError):
    """Window is empty, reversed, naive, or an unknown preset."""

    code = "INVALID_WINDOW"

    def __init__(self, detail: str, start=None, end=None):
        self.detail = detail
        self.start = start
        self.end = end
        super().__init__(f"Invalid window: {detail}")


class InvalidRecord(AnalyticsError):
    """
    A record carries a missing, negative or malformed field.

    The engine refuses to coerce bad values (e.g. negative -> 0):
    that would mask upstream data corruption.
    """

    code = "INVALID_RECORD"

    def __init__(self, record_id, field: str, detail: str):
        self.record_id = record_id
        self.field = field
        self.detail = detail
        super().__init__(f"Invalid record {record_id!r} ({field}): {detail}")
