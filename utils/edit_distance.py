"""
Edit distance helpers
Levenshtein distance backed by rapidfuzz
"""

from typing import Optional, Sequence, Tuple

from rapidfuzz import process as rf_process
from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """
    Levenshtein distance; insertions, deletions and substitutions each cost 1.
    Case-sensitive, callers lower-case first.
    """
    return Levenshtein.distance(a, b)


def closest_match(value: str, candidates: Sequence[str]) -> Tuple[Optional[str], Optional[int]]:
    """
    Return (candidate, distance) with the smallest distance to value.
    Ties go to the earliest candidate.
    """
    match = rf_process.extractOne(value, candidates, scorer=Levenshtein.distance)
    if match is None:
        return None, None
    return match[0], int(match[1])
