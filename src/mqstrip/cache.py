"""Thread-safe per-run cache of parsed stylesheets, keyed by file path."""

from __future__ import annotations

import logging
import os
import threading
from typing import Callable

from mqstrip.model.node import Stylesheet
from mqstrip.stylesheet import parse_stylesheet

logger = logging.getLogger(__name__)

Parser = Callable[[str, str], Stylesheet]


class ParseCache:
    """Maps a file path (as given) to its parsed Stylesheet.

    The first ``get`` for a path reads and parses the file; later calls return
    the same object. Entries are never evicted. Concurrent callers asking for
    the same path wait on a per-path lock, so each file is parsed once.
    Read and parse errors propagate unchanged and leave no entry behind.
    """

    def __init__(self, encoding: str = "utf-8", parser: Parser = parse_stylesheet) -> None:
        self._encoding = encoding
        self._parser = parser
        self._lock = threading.Lock()
        self._path_locks: dict[str, threading.Lock] = {}
        self._entries: dict[str, Stylesheet] = {}
        self._parse_count = 0

    def get(self, path: str | os.PathLike[str]) -> Stylesheet:
        """Return the parsed stylesheet for *path*, parsing it on first use."""
        key = os.fspath(path)
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                return cached
            path_lock = self._path_locks.setdefault(key, threading.Lock())

        with path_lock:
            with self._lock:
                cached = self._entries.get(key)
            if cached is not None:
                return cached

            stylesheet = self._load(key)
            with self._lock:
                self._entries[key] = stylesheet
                self._parse_count += 1
            return stylesheet

    def _load(self, path: str) -> Stylesheet:
        logger.debug("Parsing %s", path)
        with open(path, encoding=self._encoding, newline="") as fh:
            source = fh.read()
        return self._parser(source, path)

    @property
    def parse_count(self) -> int:
        """Number of files actually read and parsed so far."""
        with self._lock:
            return self._parse_count

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._path_locks.clear()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        with self._lock:
            return os.fspath(path) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        with self._lock:
            return f"ParseCache(entries={len(self._entries)}, parses={self._parse_count})"
