from datetime import date
from pydantic import BaseModel

class VirtualDateIn(BaseModel):
    date: date

class VirtualDateOut(BaseModel):
    date: str
