class ShareError(Exception):
    """Base class for everything the share/preview flow can raise."""


class NotFound(ShareError):
    pass


class LoadFailure(NotFound):
    """Store or transport failure while resolving a share.

    Subclasses NotFound so callers that only care about "no record" keep
    showing the same message; the cause is kept for logging.
    """

    def __init__(self, share_link_id, cause=None):
        super().__init__(share_link_id)
        self.share_link_id = share_link_id
        self.cause = cause


class InvalidAccessCode(ShareError):
    pass


class MissingAsset(ShareError):
    def __init__(self, kind: str, share_link_id: str | None = None):
        super().__init__(f"{kind} asset missing for {share_link_id}")
        self.kind = kind
        self.share_link_id = share_link_id


class DecodeError(ShareError, ValueError):
    pass


class GateError(ShareError):
    pass


class RateExceeded(ValueError):
    pass


class InvalidFeedback(ShareError):
    pass
