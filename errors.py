from typing import Optional, Sequence


class AnalyticsError(Exception):
    """Base error for everything the analytics engine rejects."""


class MissingFieldError(AnalyticsError):
    """A record lacks a field some derived view needs."""

    def __init__(self, field: str, index: Optional[int] = None):
        self.field = field
        self.index = index
        where = f"record {index}" if index is not None else "record"
        super().__init__(f"{where} is missing required field '{field}'")


class UnclassifiableFeedItemError(AnalyticsError):
    """A feed item exposes neither a 'platform' nor a 'channel' field."""

    def __init__(self, index: Optional[int] = None, keys: Sequence[str] = ()):
        self.index = index
        self.keys = list(keys)
        where = f"feed item {index}" if index is not None else "feed item"
        super().__init__(
            f"{where} has neither 'platform' nor 'channel' (keys: {', '.join(self.keys) or 'none'})"
        )
