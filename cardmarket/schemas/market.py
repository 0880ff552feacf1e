"""Market DTOs.

Field names follow Python conventions; aliases match the API's JSON.
Unknown fields are ignored so new API fields never break decoding.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MarketModel(BaseModel):
    """Base for API DTOs: immutable, alias-aware, tolerant of unknown fields."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class Localization(MarketModel):
    """Name of an entity in one language."""

    language_id: Optional[int] = Field(None, alias="idLanguage")
    language_name: Optional[str] = Field(None, alias="languageName")
    name: Optional[str] = None


class Expansion(MarketModel):
    """A card set released for a game."""

    expansion_id: Optional[int] = Field(None, alias="idExpansion")
    en_name: Optional[str] = Field(None, alias="enName")
    localizations: List[Localization] = Field(default_factory=list, alias="localization")
    abbreviation: Optional[str] = None
    icon: Optional[int] = None
    release_date: Optional[datetime] = Field(None, alias="releaseDate")
    is_released: Optional[bool] = Field(None, alias="isReleased")
    game_id: Optional[int] = Field(None, alias="idGame")


class ExpansionList(MarketModel):
    """Envelope returned by the expansions endpoint."""

    expansions: List[Expansion] = Field(default_factory=list, alias="expansion")
