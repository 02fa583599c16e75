'''
Python SDK for the Epson Connect printing and scanning API
'''
from epson_connect.api_clients import Client, Printer, Scanner
from epson_connect.exceptions import (
    ApiError,
    AuthenticationError,
    ClientError,
    EpsonConnectError,
    PrinterError,
    PrintSettingError,
    ScannerError,
)
from epson_connect.models import Destination, PrintSetting, PrintSettings, SessionState
from epson_connect.utils.token_manager import AuthContext

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "AuthContext",
    "AuthenticationError",
    "Client",
    "ClientError",
    "Destination",
    "EpsonConnectError",
    "PrintSetting",
    "PrintSettings",
    "Printer",
    "PrinterError",
    "PrintSettingError",
    "Scanner",
    "ScannerError",
    "SessionState",
]
