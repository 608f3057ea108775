"""
Document loading and caching for the comparison viewer.

Parsed documents are kept in a bounded DocumentCache that the app owns
and passes to whoever needs it, keyed by path, modification time and
dialect so an edited file is re-parsed on the next comparison.
"""

from __future__ import annotations

import logging
import os
from collections import OrderedDict

from edicompare.segments import (
    ParsedDocument,
    ensure_comparable,
    load_document,
)

logger = logging.getLogger(__name__)

CacheKey = tuple[str, float, str]


class DocumentCache:
    """Least-recently-used cache of parsed documents."""

    DEFAULT_MAX_ENTRIES: int = 8

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        self._max_entries = max(1, max_entries)
        self._entries: OrderedDict[CacheKey, ParsedDocument] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def _key(self, filename: str, dialect: str) -> CacheKey:
        path = os.path.abspath(filename)
        return (path, os.path.getmtime(path), dialect)

    def get(self, filename: str, dialect: str = "auto") -> ParsedDocument | None:
        """Return the cached document for a file, or None if absent or stale."""
        try:
            key = self._key(filename, dialect)
        except OSError:
            return None
        document = self._entries.get(key)
        if document is not None:
            self._entries.move_to_end(key)
        return document

    def put(self, filename: str, document: ParsedDocument, dialect: str = "auto") -> None:
        """Store a parsed document, evicting the least recently used entry."""
        key = self._key(filename, dialect)
        self._entries[key] = document
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted %s from document cache", evicted[0])

    def clear(self, filename: str | None = None) -> None:
        """Clear cached documents.

        Args:
            filename: Only drop entries for this file. If None, clears all.
        """
        if filename is None:
            self._entries.clear()
            return
        path = os.path.abspath(filename)
        for key in [key for key in self._entries if key[0] == path]:
            del self._entries[key]

    def load(self, filename: str, dialect: str = "auto") -> ParsedDocument:
        """Return a parsed document, parsing and caching it on a miss.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the dialect cannot be determined.
        """
        document = self.get(filename, dialect)
        if document is None:
            document = load_document(filename, dialect)
            self.put(filename, document, dialect)
        return document


def load_document_pair(
    left_path: str,
    right_path: str,
    cache: DocumentCache,
    dialect: str = "auto",
) -> tuple[ParsedDocument, ParsedDocument]:
    """Load two documents through the cache and check they are comparable.

    Raises:
        FileNotFoundError: If either file does not exist.
        ValueError: If a dialect cannot be determined or the dialects differ.
    """
    left = cache.load(left_path, dialect)
    right = cache.load(right_path, dialect)
    ensure_comparable(left, right)
    return left, right
