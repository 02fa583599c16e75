from epson_connect.api_clients.client import Client
from epson_connect.api_clients.printer import Printer
from epson_connect.api_clients.scanner import Scanner

__all__ = ["Client", "Printer", "Scanner"]
