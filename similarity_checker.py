#!/usr/bin/env python3
"""
Name Similarity Checker
=======================
Edit-distance comparison used to decide whether a generated name is just a
spelling variant of a name that already exists.

All comparisons are case-insensitive. Two names are "too similar" when they
are fewer than ``threshold`` single-character edits apart.
"""

from dataclasses import dataclass
from typing import Iterable, List

from settings import get_setting

DEFAULT_THRESHOLD = get_setting("similarity.threshold")
if DEFAULT_THRESHOLD is None:
    raise ValueError("similarity.threshold must be set in app.yaml")


def levenshtein_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein (edit) distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def distance(a: str, b: str) -> int:
    """Case-insensitive edit distance between two names."""
    return levenshtein_distance(a.lower(), b.lower())


def too_similar(a: str, b: str, threshold: int = None) -> bool:
    """
    Check if two names are too similar.

    Args:
        a: First name
        b: Second name
        threshold: Minimum number of edits for two names to count as
            distinct (default from ``similarity.threshold``)

    Returns:
        True if ``distance(a, b) < threshold``
    """
    if threshold is None:
        threshold = DEFAULT_THRESHOLD
    return distance(a, b) < threshold


def normalized_similarity(s1: str, s2: str) -> float:
    """Calculate normalized similarity (0-1, higher = more similar)."""
    dist = distance(s1, s2)
    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 1.0
    return 1.0 - (dist / max_len)


@dataclass
class SimilarityMatch:
    """A known name found to be close to a candidate"""
    name: str
    known_name: str
    distance: int

    @property
    def is_exact(self) -> bool:
        return self.distance == 0

    @property
    def similarity(self) -> float:
        return normalized_similarity(self.name, self.known_name)


def find_similar(name: str, known_names: Iterable[str],
                 threshold: int = None) -> List[SimilarityMatch]:
    """
    Find every known name that is too similar to ``name``.

    Returns:
        Matches sorted by distance, closest first
    """
    if threshold is None:
        threshold = DEFAULT_THRESHOLD

    matches = []
    for known in known_names:
        dist = distance(name, known)
        if dist < threshold:
            matches.append(SimilarityMatch(name=name, known_name=known, distance=dist))

    matches.sort(key=lambda m: m.distance)
    return matches
