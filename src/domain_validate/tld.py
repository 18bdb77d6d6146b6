from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import idna
import tldextract

from .options import ValidatorOptions

_ENTRY_RE = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")
_VERSION_RE = re.compile(r"^#\s*Version\s+([^\s,]+)")


@dataclass(frozen=True)
class TldTable:
    version: str
    tlds: frozenset[str]

    def __contains__(self, label: object) -> bool:
        return isinstance(label, str) and label.lower() in self.tlds

    def __len__(self) -> int:
        return len(self.tlds)


def load_tld_table(path: Path | None = None) -> TldTable:
    """
    Load a TLD table.

    With no path the built-in table is returned: the ICANN top-level domains
    of the Public Suffix List snapshot bundled with tldextract, built once and
    shared for the life of the process. A path loads a replacement
    table from a file: one TLD per line, blank lines and '#' comments
    skipped, an optional leading "# Version <id>" comment.
    """
    if path is None:
        return _builtin_table()
    with path.open("r", encoding="utf-8") as fh:
        return parse_tld_lines(fh, src=str(path))


def parse_tld_lines(lines: Iterable[str], *, src: str) -> TldTable:
    version = "unknown"
    tlds: set[str] = set()
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        if line.startswith("#"):
            m = _VERSION_RE.match(line)
            if m and not tlds and version == "unknown":
                version = m.group(1)
            continue
        entry = line.split("#", 1)[0].strip().lower()
        if not _ENTRY_RE.match(entry):
            raise ValueError(f"{src}:{lineno}: invalid TLD entry: {line!r}")
        tlds.add(entry)
    if not tlds:
        raise ValueError(f"{src}: TLD table is empty")
    return TldTable(version=version, tlds=frozenset(tlds))


@lru_cache(maxsize=None)
def _builtin_table() -> TldTable:
    # Bundled snapshot only: no network fetch, no cache directory.
    extractor = tldextract.TLDExtract(
        cache_dir=None,
        suffix_list_urls=(),
        include_psl_private_domains=False,
    )
    tlds: set[str] = set()
    for suffix in extractor.tlds:
        tld = suffix.rsplit(".", 1)[-1].lstrip("!*").lower()
        if not tld:
            continue
        if not tld.isascii():
            try:
                tld = idna.encode(tld).decode("ascii")
            except idna.IDNAError:
                # Not representable as an A-label, so no ASCII label can name it.
                continue
        tlds.add(tld)
    return TldTable(version=tldextract.__version__, tlds=frozenset(tlds))


def tld_exists(label: str, table: TldTable | None = None) -> bool:
    """Return True if ``label`` is a registered top-level domain (case-insensitive)."""
    active = _builtin_table() if table is None else table
    return label in active


def private_tld_matches(label: str, private_tld: Any) -> bool:
    if isinstance(private_tld, frozenset):
        return label.lower() in private_tld
    if isinstance(private_tld, re.Pattern) and isinstance(private_tld.pattern, str):
        # Patterns see the label as given; only the set lookup folds case.
        return private_tld.search(label) is not None
    return False


def tld_is_valid(
    label: str, options: ValidatorOptions, table: TldTable | None = None
) -> bool:
    if options.private_tld is not None and private_tld_matches(label, options.private_tld):
        return True
    return tld_exists(label, table)
