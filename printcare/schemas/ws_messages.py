from __future__ import annotations
from pydantic import BaseModel


class ChangeEvent(BaseModel):
    table: str
    event: str  # INSERT | UPDATE | DELETE
    record_id: str = ""
