"""
Base exceptions shared by every component.
"""


class ClinicCoreError(Exception):
    """Base exception for the booking/payment core.

    Every subclass carries a stable ``code`` discriminator that callers
    (the HTTP adapter in particular) can map onto their own status codes.
    """

    code = "error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__ or self.code)
        self.message = str(self.args[0])


class InvalidRequest(ClinicCoreError):
    """Malformed or missing identifier in the request."""

    code = "invalid_request"


class StorageError(ClinicCoreError):
    """Transient failure of the underlying store."""

    code = "storage_error"
