# destination.py
from typing import Literal
from pydantic import BaseModel

DestinationType = Literal["mail", "url"]

VALID_DESTINATION_TYPES = {"mail", "url"}


class Destination(BaseModel):
    '''
    Scan destination as registered with the scanning service.
    '''
    id: str
    alias_name: str
    destination: str
    type: DestinationType
