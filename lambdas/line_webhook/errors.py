class WebhookError(Exception):
    """Base class for failures that end a webhook invocation."""


class InvalidSignature(WebhookError):
    pass


class MalformedBody(WebhookError):
    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index


class ClientInitFailure(WebhookError):
    pass


class ReplyFailure(WebhookError):
    def __init__(self, message: str, index: int, reply_token: str):
        super().__init__(message)
        self.index = index
        self.reply_token = reply_token


class LineApiError(Exception):
    """Raised by the reply client on a transport error or a non-2xx answer."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
