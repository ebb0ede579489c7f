#!/usr/bin/env python3
"""
Word-List Loader
================
Reads the on-disk name data for a race/sex selection.

Layout under the data root:

    blacklist_firstnames.txt
    blacklist_lastnames.txt
    <race>/firstnames_<sex>/vanilla.txt, tr.txt, ...
    <race>/lastnames/vanilla.txt, ...
    <race>/fullnames/vanilla.txt, ...

Each file in a list directory is one source; its stem is the provenance
tag. A ``manifest.json`` (``{"files": ["extra.txt"]}``) in a directory adds
files beyond the defaults. Missing files are normal: any source may be
absent, only an empty firstname or lastname pool is an error.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from .models import BASE_SOURCE
from .pool import NameDataset
from .settings import get_setting, resolve_path

logger = logging.getLogger(__name__)

REPLACEMENT_CHAR = '\ufffd'


def _load_loader_settings() -> dict:
    cfg = {
        "default_files": get_setting("sources.default_files"),
        "manifest": get_setting("sources.manifest"),
        "root": get_setting("data.root"),
        "firstnames_dir": get_setting("data.firstnames_dir"),
        "lastnames_dir": get_setting("data.lastnames_dir"),
        "fullnames_dir": get_setting("data.fullnames_dir"),
        "blacklist_firstnames": get_setting("data.blacklist_firstnames"),
        "blacklist_lastnames": get_setting("data.blacklist_lastnames"),
    }
    missing = [name for name, value in cfg.items() if value is None]
    if missing:
        raise ValueError(f"loader settings missing in app.yaml: {', '.join(missing)}")
    return cfg


LOADER_SETTINGS = _load_loader_settings()


class SourceStatus(Enum):
    """Outcome of reading one source file."""
    LOADED = "loaded"
    ABSENT = "absent"


@dataclass
class SourceFile:
    """One word-list file and the usable lines read from it"""
    path: Path
    status: SourceStatus
    lines: List[str] = field(default_factory=list)
    dropped: int = 0  # undecodable lines

    @property
    def provenance(self) -> str:
        return self.path.stem

    @property
    def loaded(self) -> bool:
        return self.status == SourceStatus.LOADED


def read_source(path: Path) -> SourceFile:
    """
    Read a word-list file.

    A missing file is reported as ABSENT. Bytes that are not valid UTF-8
    only cost the lines they appear on; the rest of the file is kept.
    """
    path = Path(path)
    if not path.is_file():
        logger.debug(f"Source not found: {path}")
        return SourceFile(path=path, status=SourceStatus.ABSENT)

    text = path.read_bytes().decode("utf-8", errors="replace")
    lines = []
    dropped = 0
    for line in text.splitlines():
        if REPLACEMENT_CHAR in line:
            dropped += 1
            continue
        lines.append(line)

    if dropped:
        logger.warning(f"Dropped {dropped} undecodable line(s) from {path}")
    return SourceFile(path=path, status=SourceStatus.LOADED, lines=lines, dropped=dropped)


class DirectoryLoader:
    """
    Loads datasets from a data root directory.

    Usage:
        loader = DirectoryLoader()
        dataset = loader.load("dunmer", "male")
    """

    def __init__(self, root: Optional[Path] = None, default_files: Optional[List[str]] = None,
                 base_source: str = None):
        self.root = Path(root) if root is not None else resolve_path(LOADER_SETTINGS["root"])
        self.default_files = list(default_files or LOADER_SETTINGS["default_files"])
        self.base_source = base_source or BASE_SOURCE

    def list_files(self, directory: Path) -> List[str]:
        """Default file names plus any listed in the directory's manifest."""
        files = list(self.default_files)
        manifest_path = directory / LOADER_SETTINGS["manifest"]
        if not manifest_path.is_file():
            return files

        try:
            manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable manifest {manifest_path}: {e}")
            return files

        extra = manifest.get("files") if isinstance(manifest, dict) else None
        if isinstance(extra, list):
            for name in extra:
                if isinstance(name, str) and name not in files:
                    files.append(name)
        return files

    def read_directory(self, relative: str) -> List[SourceFile]:
        """Read every listed source file in a directory under the root."""
        directory = self.root / relative
        return [read_source(directory / name) for name in self.list_files(directory)]

    def read_tagged_lines(self, relative: str) -> List[Tuple[str, str]]:
        """``(line, provenance)`` pairs from all sources in a directory."""
        tagged = []
        for source in self.read_directory(relative):
            tagged.extend((line, source.provenance) for line in source.lines)
        return tagged

    def read_blacklist(self, filename: str) -> List[str]:
        return read_source(self.root / filename).lines

    def load(self, race: str, sex: str) -> NameDataset:
        """
        Load the dataset for a race/sex selection.

        Raises:
            DataMissingError: If no firstnames or no lastnames could be loaded
        """
        dirs = {
            key: LOADER_SETTINGS[key].format(race=race, sex=sex)
            for key in ("firstnames_dir", "lastnames_dir", "fullnames_dir")
        }

        dataset = NameDataset.from_lines(
            firstname_lines=self.read_tagged_lines(dirs["firstnames_dir"]),
            lastname_lines=self.read_tagged_lines(dirs["lastnames_dir"]),
            fullname_lines=self.read_tagged_lines(dirs["fullnames_dir"]),
            firstname_blacklist_lines=self.read_blacklist(LOADER_SETTINGS["blacklist_firstnames"]),
            lastname_blacklist_lines=self.read_blacklist(LOADER_SETTINGS["blacklist_lastnames"]),
            base_source=self.base_source,
            selector=f"{race}/{sex}",
        )
        logger.info(f"Loaded {race}/{sex} from {self.root}")
        return dataset
