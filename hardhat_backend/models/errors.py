"""Error taxonomy surfaced at the HTTP boundary."""


class HardHatAPIError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthorized(HardHatAPIError):
    status_code = 401
    message = "Unauthorized"


class MissingField(HardHatAPIError):
    status_code = 400

    def __init__(self, *fields: str):
        self.fields = fields
        super().__init__("Missing " + " or ".join(fields))


class StorageFailure(HardHatAPIError):
    """The store was unreachable or rejected a statement.

    ``message`` is safe to return to callers; ``detail`` is for server logs only.
    """

    status_code = 500

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Database {operation} failed")
