from epson_connect.models.destination import Destination, DestinationType
from epson_connect.models.print_settings import PrintSetting, PrintSettings
from epson_connect.models.session import SessionState

__all__ = [
    "Destination",
    "DestinationType",
    "PrintSetting",
    "PrintSettings",
    "SessionState",
]
