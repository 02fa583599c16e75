"""
Defines the SDK exception classes.
"""


class EpsonConnectError(Exception):
    """Base class for all errors raised by the SDK itself."""
    pass


class AuthenticationError(EpsonConnectError):
    """Raised when a token exchange (password or refresh grant) fails."""
    pass


class ApiError(EpsonConnectError):
    """
    Raised when the service answers a request successfully at the HTTP level
    but the body carries an application-level error code.
    """

    def __init__(self, code: str):
        self.code = code
        super().__init__(code)


class ClientError(EpsonConnectError):
    """Raised when the client is misconfigured or used out of order."""
    pass


class PrinterError(EpsonConnectError):
    """Raised when a printer operation is rejected locally."""
    pass


class PrintSettingError(PrinterError):
    """Raised when print settings do not match the accepted schema."""
    pass


class ScannerError(EpsonConnectError):
    """Raised when a scan destination operation is rejected locally."""
    pass
