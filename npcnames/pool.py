#!/usr/bin/env python3
"""
Name Pools & Existing-Name Index
================================
Holds one loaded dataset (one race/sex selection):

- firstname and lastname records tagged with the list they came from
- the firstname and lastname blacklists
- the full names of characters that already exist

Candidate pools are derived views over the records: deduplicated
case-insensitively, blacklisted names removed, optionally restricted to a
subset of provenance tags. Existing names are indexed lazily on the first
novelty query and reused for the lifetime of the dataset.

Blacklists only affect candidate pools. An existing character whose name
contains a blacklisted word still blocks candidates that resemble it.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

from similarity_checker import DEFAULT_THRESHOLD, SimilarityMatch, find_similar, too_similar

from .errors import DataMissingError
from .models import (
    BASE_SOURCE,
    ExistingFullName,
    NameRecord,
    NameRole,
    SourceFilter,
    clean_line,
    full_name_key,
    parse_blacklist,
    parse_fullname,
)

logger = logging.getLogger(__name__)

TaggedLine = Tuple[str, str]


# =============================================================================
# Existing-Name Index
# =============================================================================

class ExistingNameIndex:
    """
    Lookup structure over existing full names.

    Built on first use:
    - a set of full-name keys for exact matches
    - firstnames grouped by lowercased lastname for similarity checks

    Only existing names sharing the candidate's lastname are compared for
    firstname similarity.
    """

    def __init__(self, existing: Iterable[ExistingFullName], threshold: int = None):
        self._existing = tuple(existing)
        self.threshold = DEFAULT_THRESHOLD if threshold is None else threshold
        self._exact: Optional[Set[str]] = None
        self._by_lastname: Optional[Dict[str, List[str]]] = None

    def __len__(self) -> int:
        return len(self._existing)

    @property
    def materialized(self) -> bool:
        return self._exact is not None

    def _materialize(self):
        if self._exact is not None:
            return

        exact = set()
        by_lastname: Dict[str, List[str]] = {}
        seen = set()

        for name in self._existing:
            exact.add(name.key)
            if not name.lastname:
                continue
            lastname = name.lastname.lower()
            firstname = name.firstname.lower()
            if (firstname, lastname) in seen:
                continue
            seen.add((firstname, lastname))
            by_lastname.setdefault(lastname, []).append(name.firstname)

        self._exact = exact
        self._by_lastname = by_lastname
        logger.debug(f"Indexed {len(exact)} existing names across {len(by_lastname)} lastnames")

    def exists_exact(self, firstname: str, lastname: str) -> bool:
        """Case-insensitive exact full-name match."""
        self._materialize()
        return full_name_key(firstname, lastname) in self._exact

    def exists_similar(self, firstname: str, lastname: str, threshold: int = None) -> bool:
        """True if an existing name with the same lastname has a too-similar firstname."""
        self._materialize()
        if threshold is None:
            threshold = self.threshold
        siblings = self._by_lastname.get(lastname.lower(), ())
        return any(too_similar(firstname, known, threshold) for known in siblings)

    def is_taken(self, firstname: str, lastname: str) -> bool:
        """Exact or similar match against existing names."""
        return self.exists_exact(firstname, lastname) or self.exists_similar(firstname, lastname)

    def similar_matches(self, firstname: str, lastname: str,
                        threshold: int = None) -> List[SimilarityMatch]:
        """All same-lastname existing firstnames too close to ``firstname``."""
        self._materialize()
        if threshold is None:
            threshold = self.threshold
        siblings = self._by_lastname.get(lastname.lower(), ())
        return find_similar(firstname, siblings, threshold)


# =============================================================================
# Stats
# =============================================================================

@dataclass
class DatasetStats:
    """Read-only snapshot of a dataset for display"""
    unique_firstnames: int
    unique_lastnames: int
    total_firstnames: int
    total_lastnames: int
    existing_count: int
    blacklisted_firstnames: int
    blacklisted_lastnames: int

    @property
    def combinations(self) -> int:
        return self.unique_firstnames * self.unique_lastnames

    def to_dict(self) -> dict:
        return {
            'uniqueFirstnames': self.unique_firstnames,
            'uniqueLastnames': self.unique_lastnames,
            'totalFirstnames': self.total_firstnames,
            'totalLastnames': self.total_lastnames,
            'existingCount': self.existing_count,
            'blacklistedFirstnames': self.blacklisted_firstnames,
            'blacklistedLastnames': self.blacklisted_lastnames,
        }


# =============================================================================
# Dataset
# =============================================================================

class NameDataset:
    """
    One loaded race/sex dataset.

    Immutable after construction; load a new dataset instead of mutating
    this one.

    Raises:
        DataMissingError: If the firstname or lastname pool is empty once
            blacklisted names are removed
    """

    def __init__(self, firstnames: Iterable[NameRecord], lastnames: Iterable[NameRecord],
                 existing: Iterable[ExistingFullName] = (),
                 firstname_blacklist: Iterable[str] = (),
                 lastname_blacklist: Iterable[str] = (),
                 base_source: str = None, selector: str = "",
                 threshold: int = None):
        self.base_source = base_source or BASE_SOURCE
        self.selector = selector
        self._records = {
            NameRole.FIRSTNAME: tuple(firstnames),
            NameRole.LASTNAME: tuple(lastnames),
        }
        self._blacklists = {
            NameRole.FIRSTNAME: frozenset(n.lower() for n in firstname_blacklist),
            NameRole.LASTNAME: frozenset(n.lower() for n in lastname_blacklist),
        }
        self.existing = tuple(existing)
        self.index = ExistingNameIndex(self.existing, threshold=threshold)
        self._pools: Dict[Tuple[NameRole, str], Tuple[str, ...]] = {}

        for role in NameRole:
            if not self._pool(role, SourceFilter.ALL):
                raise DataMissingError(role.value, selector)

        logger.debug(
            f"Loaded dataset {selector or '(unnamed)'}: "
            f"{len(self._records[NameRole.FIRSTNAME])} firstnames, "
            f"{len(self._records[NameRole.LASTNAME])} lastnames, "
            f"{len(self.existing)} existing names"
        )

    @classmethod
    def from_lines(cls, firstname_lines: Iterable[TaggedLine],
                   lastname_lines: Iterable[TaggedLine],
                   fullname_lines: Iterable[Union[str, TaggedLine]] = (),
                   firstname_blacklist_lines: Iterable[str] = (),
                   lastname_blacklist_lines: Iterable[str] = (),
                   base_source: str = None, selector: str = "",
                   threshold: int = None) -> "NameDataset":
        """
        Build a dataset from raw lines.

        Args:
            firstname_lines: ``(line, provenance)`` pairs
            lastname_lines: ``(line, provenance)`` pairs
            fullname_lines: ``"First Last"`` / ``"First Last | tag"`` lines,
                or ``(line, default_provenance)`` pairs
            firstname_blacklist_lines: Raw blacklist lines
            lastname_blacklist_lines: Raw blacklist lines
            base_source: Provenance tag of the base list
            selector: Label for error messages, e.g. ``"dunmer/male"``
        """
        base_source = base_source or BASE_SOURCE

        existing = []
        for item in fullname_lines:
            if isinstance(item, tuple):
                line, provenance = item
            else:
                line, provenance = item, base_source
            name = parse_fullname(line, provenance)
            if name is not None:
                existing.append(name)

        return cls(
            firstnames=ingest_records(firstname_lines),
            lastnames=ingest_records(lastname_lines),
            existing=existing,
            firstname_blacklist=parse_blacklist(firstname_blacklist_lines),
            lastname_blacklist=parse_blacklist(lastname_blacklist_lines),
            base_source=base_source,
            selector=selector,
            threshold=threshold,
        )

    # -------------------------------------------------------------------------
    # Pools
    # -------------------------------------------------------------------------

    def _matches_filter(self, provenance: str, source_filter: str) -> bool:
        if source_filter == SourceFilter.ALL:
            return True
        if source_filter == SourceFilter.EXPANDED:
            return provenance != self.base_source
        return provenance == source_filter

    def _pool(self, role: NameRole, source_filter: str) -> Tuple[str, ...]:
        cache_key = (role, source_filter)
        if cache_key in self._pools:
            return self._pools[cache_key]

        blacklist = self._blacklists[role]
        seen = set()
        names = []
        for record in self._records[role]:
            if not self._matches_filter(record.provenance, source_filter):
                continue
            key = record.key
            if key in blacklist or key in seen:
                continue
            seen.add(key)
            names.append(record.text)

        pool = tuple(names)
        self._pools[cache_key] = pool
        return pool

    def pool(self, role: NameRole, source_filter: str = None) -> List[str]:
        """Unique, non-blacklisted names in first-occurrence order."""
        return list(self._pool(role, source_filter or SourceFilter.ALL))

    def get_firstnames(self, source_filter: str = None) -> List[str]:
        return self.pool(NameRole.FIRSTNAME, source_filter)

    def get_lastnames(self, source_filter: str = None) -> List[str]:
        return self.pool(NameRole.LASTNAME, source_filter)

    def records(self, role: NameRole) -> Tuple[NameRecord, ...]:
        return self._records[role]

    def blacklist(self, role: NameRole) -> frozenset:
        return self._blacklists[role]

    def provenances(self) -> List[str]:
        """Provenance tags present in the dataset, in load order."""
        tags = []
        for role in NameRole:
            for record in self._records[role]:
                if record.provenance not in tags:
                    tags.append(record.provenance)
        return tags

    def get_stats(self, source_filter: str = None) -> DatasetStats:
        return DatasetStats(
            unique_firstnames=len(self._pool(NameRole.FIRSTNAME, source_filter or SourceFilter.ALL)),
            unique_lastnames=len(self._pool(NameRole.LASTNAME, source_filter or SourceFilter.ALL)),
            total_firstnames=len(self._records[NameRole.FIRSTNAME]),
            total_lastnames=len(self._records[NameRole.LASTNAME]),
            existing_count=len(self.existing),
            blacklisted_firstnames=len(self._blacklists[NameRole.FIRSTNAME]),
            blacklisted_lastnames=len(self._blacklists[NameRole.LASTNAME]),
        )


def ingest_records(lines: Iterable[TaggedLine]) -> List[NameRecord]:
    """Turn ``(line, provenance)`` pairs into records, dropping blanks and comments."""
    records = []
    for line, provenance in lines:
        text = clean_line(line)
        if text is not None:
            records.append(NameRecord(text=text, provenance=provenance))
    return records
