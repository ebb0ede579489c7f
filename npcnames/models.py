#!/usr/bin/env python3
"""
Name Data Models
================
Records produced by ingestion and pairs produced by generation, plus the
line parsers shared by every word-list format.

Word-list format:
    # comment lines and blank lines are ignored
    Aryon
    Dilborn

Full-name format (provenance tag optional):
    Aryon Savel
    Dram Bero | tr
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Set

from .settings import get_setting

COMMENT_PREFIX = get_setting("sources.comment_prefix")
FULLNAME_SEPARATOR = get_setting("sources.fullname_separator")
BASE_SOURCE = get_setting("sources.base")
if COMMENT_PREFIX is None or FULLNAME_SEPARATOR is None or BASE_SOURCE is None:
    raise ValueError("sources.comment_prefix/fullname_separator/base must be set in app.yaml")


class NameRole(Enum):
    """Which half of a full name a word list supplies."""
    FIRSTNAME = "firstname"
    LASTNAME = "lastname"


class SourceFilter:
    """Selectors for the provenance tags used to build candidate pools."""
    ALL = get_setting("sources.all_filter", "all")
    EXPANDED = get_setting("sources.expanded_filter", "expanded")


@dataclass(frozen=True)
class NameRecord:
    """One entry from a word list"""
    text: str
    provenance: str

    @property
    def key(self) -> str:
        return self.text.lower()


@dataclass(frozen=True)
class ExistingFullName:
    """A name already in use by a character"""
    firstname: str
    lastname: Optional[str]
    provenance: str

    @property
    def full_name(self) -> str:
        if self.lastname:
            return f"{self.firstname} {self.lastname}"
        return self.firstname

    @property
    def key(self) -> str:
        return full_name_key(self.firstname, self.lastname)


@dataclass(frozen=True)
class GeneratedPair:
    """A generated firstname/lastname combination"""
    firstname: str
    lastname: str

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}"

    @property
    def key(self) -> str:
        return full_name_key(self.firstname, self.lastname)

    def to_dict(self) -> dict:
        return {'firstname': self.firstname, 'lastname': self.lastname}

    def __str__(self) -> str:
        return self.full_name


def full_name_key(firstname: str, lastname: Optional[str]) -> str:
    """Case-folded, whitespace-normalized lookup key for a full name."""
    parts = [firstname] if not lastname else [firstname, lastname]
    return ' '.join(' '.join(parts).split()).lower()


def clean_line(line: str) -> Optional[str]:
    """Trim a raw line; None if it is blank or a comment."""
    line = line.strip()
    if not line or line.startswith(COMMENT_PREFIX):
        return None
    return line


def iter_name_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield trimmed lines, skipping blanks and comments."""
    for line in lines:
        line = clean_line(line)
        if line is not None:
            yield line


def parse_blacklist(lines: Iterable[str]) -> Set[str]:
    """Parse blacklist lines into a case-folded set."""
    return {line.lower() for line in iter_name_lines(lines)}


def parse_fullname(line: str, default_provenance: str = None) -> Optional[ExistingFullName]:
    """
    Parse one full-name line.

    The first word is the firstname and the remainder the lastname; a
    single word is a firstname with no lastname. A trailing
    ``| provenance`` overrides ``default_provenance`` (which itself
    defaults to the base source).

    Returns:
        ExistingFullName, or None for blank/comment lines
    """
    line = clean_line(line)
    if line is None:
        return None

    provenance = default_provenance or BASE_SOURCE
    if FULLNAME_SEPARATOR in line:
        line, tag = line.rsplit(FULLNAME_SEPARATOR, 1)
        line = line.strip()
        provenance = tag.strip() or provenance
        if not line:
            return None

    parts = line.split(None, 1)
    firstname = parts[0]
    lastname = parts[1].strip() if len(parts) > 1 else None
    return ExistingFullName(firstname=firstname, lastname=lastname, provenance=provenance)
