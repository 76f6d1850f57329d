"""
models/game_record.py – Immutable data models for catalogue search results.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GameRecord:
    """
    Represents one game returned by the catalogue service.

    Attributes
    ----------
    id   : Catalogue identifier (non-empty, unique key).
    name : Primary display name (non-empty).
    year : Publication year as reported by the service, or None when absent.
    """

    id: str
    name: str
    year: Optional[str] = None

    def __str__(self) -> str:
        if self.year:
            return f"{self.name} ({self.year})"
        return self.name


@dataclass(frozen=True)
class DisplayEntry:
    """
    One rendered line of the results list.

    Attributes
    ----------
    target : Relative link target, always ``game/<decimal-id>``.
    label  : Visible text of the entry.
    record : The record the entry was built from.
    """

    target: str
    label: str
    record: GameRecord

    def __str__(self) -> str:
        return f"{self.label}  →  {self.target}"
