# zanders/exceptions.py

class MissingArgument(ValueError):
    """A required option was not supplied. Raised before any network call."""
    def __init__(self, missing: list[str]):
        super().__init__(f"Missing required parameter: {', '.join(missing)}")
        self.missing = missing


class NotAuthenticated(Exception):
    """The FTP drop refused the supplied username/password."""


class MalformedResponse(Exception):
    """
    Raised when a SOAP response does not carry the return-code item list we
    decode against. Keeps the raw body so callers can log what came back.
    """
    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        raw_body: object | None = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.raw_body = raw_body
