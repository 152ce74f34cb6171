"""Source file selection: glob expansion, ignore list and self-exclusion."""

from __future__ import annotations

import glob
import logging
import os
import re
from typing import Iterable, Union

logger = logging.getLogger(__name__)

# Characters that make a path a glob pattern.
_MAGIC_RE = re.compile(r"[*?[]")

# Dots and a trailing ".css" are not part of a suffix.
_SUFFIX_NOISE_RE = re.compile(r"\.css$|\.")

PathSpec = Union[str, os.PathLike, Iterable[Union[str, os.PathLike]], None]


def clean_suffix(suffix: str) -> str:
    """Normalize a stripped-file suffix: ``".min.css"`` -> ``"min"``."""
    return _SUFFIX_NOISE_RE.sub("", suffix)


def stripped_path(path: str, suffix: str) -> str:
    """Output path for the stripped copy of *path*.

    ``"css/a.css"`` with suffix ``"stripped"`` becomes ``"css/a.stripped.css"``.
    """
    suffix = clean_suffix(suffix)
    directory, filename = os.path.split(path)
    if ".css" in filename:
        filename = filename.replace(".css", f".{suffix}.css", 1)
    else:
        filename = f"{filename}.{suffix}.css"
    return os.path.join(directory, filename)


def _same_path(a: str, b: str) -> bool:
    return os.path.normcase(os.path.abspath(a)) == os.path.normcase(os.path.abspath(b))


def expand_paths(spec: PathSpec, *, glob_literals: bool = False) -> list[str]:
    """Expand a glob pattern or a list of paths/patterns into a path list.

    A single string is always treated as a glob. In a list, entries holding
    glob characters are expanded and plain paths are kept as given unless
    *glob_literals* is set, in which case missing plain paths are dropped.
    Order follows the input; each pattern's matches are sorted.
    """
    if spec is None:
        return []
    if isinstance(spec, (str, os.PathLike)):
        return sorted(glob.glob(os.fspath(spec), recursive=True))

    paths: list[str] = []
    seen: set[str] = set()
    for entry in spec:
        entry = os.fspath(entry)
        if _MAGIC_RE.search(entry):
            matches = sorted(glob.glob(entry, recursive=True))
        elif glob_literals:
            matches = [entry] if os.path.exists(entry) else []
        else:
            matches = [entry]
        for match in matches:
            if match not in seen:
                seen.add(match)
                paths.append(match)
    return paths


def resolve_source_files(
    src: PathSpec,
    *,
    dest: str,
    stripped_suffix: str,
    ignore: PathSpec = None,
) -> list[str]:
    """Resolve the list of CSS files to process.

    Excludes ignored paths, the destination file itself, and any file whose
    name contains the stripped suffix (output of an earlier run).
    """
    candidates = expand_paths(src)
    ignored = [os.path.abspath(p) for p in expand_paths(ignore, glob_literals=True)]
    suffix = clean_suffix(stripped_suffix)

    files: list[str] = []
    for path in candidates:
        if any(_same_path(path, other) for other in ignored):
            logger.debug("Ignoring %s", path)
            continue
        if _same_path(path, dest):
            logger.debug("Skipping destination file %s", path)
            continue
        if suffix and suffix in os.path.basename(path):
            logger.debug("Skipping previously stripped file %s", path)
            continue
        files.append(path)
    return files
