#!/usr/bin/env python3
"""Errors raised by the name generator. All of them need caller action."""


class NameGenError(Exception):
    """Base class for name generator errors."""


class DataMissingError(NameGenError, ValueError):
    """A required name pool is empty after loading a dataset."""

    def __init__(self, role: str, selector: str = ""):
        self.role = role
        self.selector = selector
        where = f" for {selector}" if selector else ""
        super().__init__(f"No {role}s found{where}")


class EmptyPoolError(NameGenError, ValueError):
    """The pool for a source filter is empty at generation time."""

    def __init__(self, role: str, source_filter: str):
        self.role = role
        self.source_filter = source_filter
        super().__init__(
            f"No {role}s available for source '{source_filter}' "
            f"(check source filter and blacklist)"
        )


class NotLoadedError(NameGenError, RuntimeError):
    """Generation or lookup attempted before any dataset was loaded."""

    def __init__(self, message: str = "Data not loaded"):
        super().__init__(message)
