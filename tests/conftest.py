"""Shared fixtures for npcnames tests."""

import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class ScriptedRandom:
    """Random source that returns a fixed sequence of choices."""

    def __init__(self, values):
        self._values = iter(values)
        self.calls = 0

    def choice(self, seq):
        self.calls += 1
        value = next(self._values)
        assert value in seq, f"{value!r} not in pool {seq!r}"
        return value


class ExplodingRandom:
    """Random source that fails if it is ever used."""

    def choice(self, seq):
        raise AssertionError("random source should not be used")


def write_file(root: Path, relative: str, text: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def data_root(tmp_path):
    """A small data directory for dunmer/male."""
    write_file(tmp_path, "blacklist_firstnames.txt", "# blocked\nVivec\n")
    write_file(tmp_path, "blacklist_lastnames.txt", "Dagoth\n")
    write_file(tmp_path, "dunmer/firstnames_male/vanilla.txt", "Aryon\nDilborn\nVivec\n")
    write_file(tmp_path, "dunmer/firstnames_male/tr.txt", "# TR names\nAlvur\n\naryon\n")
    write_file(tmp_path, "dunmer/lastnames/vanilla.txt", "Savel\nDagoth\n")
    write_file(tmp_path, "dunmer/lastnames/tr.txt", "Dralas\n")
    write_file(tmp_path, "dunmer/fullnames/vanilla.txt", "Aryon Savel\n")
    write_file(tmp_path, "dunmer/fullnames/tr.txt", "Alvur Dralas\nDilborn Dralas | pc\n")
    return tmp_path
