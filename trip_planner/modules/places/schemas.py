from pydantic import BaseModel
from typing import Optional


class PlacesSearchRequest(BaseModel):
    query: Optional[str] = None
    location: Optional[str] = None
