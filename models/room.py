"""Datenmodell für einen Raum (Pydantic v2)."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Room(BaseModel):
    """Repräsentiert einen buchbaren Raum, wie ihn der Server liefert."""

    model_config = ConfigDict(populate_by_name=True)

    id: Union[int, str]
    name: str                        # "E06", "Hörsaal 2"
    capacity: Optional[int] = None
    location: Optional[str] = None
    room_type: Optional[str] = Field(default=None, alias="type")
