"""Marketplace data transfer objects."""

from cardmarket.schemas.market import Expansion, ExpansionList, Localization

__all__ = ["Expansion", "ExpansionList", "Localization"]
