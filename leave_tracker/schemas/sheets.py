from pydantic import BaseModel
from typing import List

class TabResponse(BaseModel):
    header: List[str]
    rows: List[List[str]]

class ErrorResponse(BaseModel):
    error: str
