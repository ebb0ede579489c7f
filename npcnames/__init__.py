#!/usr/bin/env python3
"""
npcnames - NPC Name Generator
=============================

Generates new firstname/lastname combinations for game characters from a
base word list and any number of expansion lists, and refuses names that
already exist or are a near spelling variant of an existing name.

Quick Start
-----------
    from npcnames import NPCNameGenerator

    gen = NPCNameGenerator()
    gen.load("dunmer", "female")

    # Ten new names drawn from expansion lists only
    names = gen.generate(10, "expanded")

    # Pool sizes and blacklist counts
    stats = gen.get_stats("expanded")

Modules
-------
    similarity_checker - Edit distance and the too-similar predicate
    npcnames.pool      - Name pools and the existing-name index
    npcnames.sampler   - Rejection sampler for novel combinations
    npcnames.loader    - Word-list directory loader

CLI Usage
---------
    python -m npcnames generate -r dunmer -s male -n 10
    python -m npcnames stats -r dunmer -s male --source expanded
    python -m npcnames check Aryon Savel -r dunmer -s male
"""

__version__ = "0.2.0"
__author__ = "npcnames"

import sys
from pathlib import Path

# Ensure parent directory is in path for imports
_parent = Path(__file__).parent.parent
if str(_parent) not in sys.path:
    sys.path.insert(0, str(_parent))

from similarity_checker import distance, too_similar

from .errors import (
    NameGenError,
    DataMissingError,
    EmptyPoolError,
    NotLoadedError,
)
from .models import (
    NameRecord,
    ExistingFullName,
    GeneratedPair,
    NameRole,
    SourceFilter,
)
from .pool import (
    NameDataset,
    ExistingNameIndex,
    DatasetStats,
)
from .sampler import NovelNameSampler, SamplingRun
from .loader import DirectoryLoader, SourceFile, SourceStatus
from .generator import NPCNameGenerator

__all__ = [
    "__version__",
    "distance",
    "too_similar",
    "NameGenError",
    "DataMissingError",
    "EmptyPoolError",
    "NotLoadedError",
    "NameRecord",
    "ExistingFullName",
    "GeneratedPair",
    "NameRole",
    "SourceFilter",
    "NameDataset",
    "ExistingNameIndex",
    "DatasetStats",
    "NovelNameSampler",
    "SamplingRun",
    "DirectoryLoader",
    "SourceFile",
    "SourceStatus",
    "NPCNameGenerator",
]
