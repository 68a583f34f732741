class SubscriberLookupError(Exception):
    """Base error rendered as {"error": message} at the HTTP boundary."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SubscriberLookupError):
    status_code = 400


class ConfigurationError(SubscriberLookupError):
    pass


class UpstreamError(SubscriberLookupError):
    def __init__(self, message: str, upstream_status: int | None = None, reason: str | None = None):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.reason = reason

    @property
    def is_quota_exceeded(self) -> bool:
        return (self.reason or "").lower() in {"quotaexceeded", "dailylimitexceeded", "ratelimitexceeded"}


class NotFoundError(SubscriberLookupError):
    status_code = 404

    def __init__(self, message: str, kind: str):
        super().__init__(message)
        # video | search | channel_id
        self.kind = kind


class UnexpectedError(SubscriberLookupError):
    pass
