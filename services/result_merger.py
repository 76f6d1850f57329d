"""
services/result_merger.py – Collapse the planner's priority-ordered output.
"""

from typing import Iterable, List, Set

from models.game_record import GameRecord


def merge(records: Iterable[GameRecord]) -> List[GameRecord]:
    """
    De-duplicate by identifier while preserving order.

    The first occurrence of an identifier wins, so records placed earlier by
    the planner (identifier lookups, then exact matches) outrank later ones.
    """
    seen: Set[str] = set()
    unique: List[GameRecord] = []
    for record in records:
        if record.id not in seen:
            seen.add(record.id)
            unique.append(record)
    return unique
