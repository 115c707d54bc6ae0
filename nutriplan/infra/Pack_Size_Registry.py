"""Pack-size registry: ingredient name -> standard retail packaging.

Lookup policy (`PackSizeRegistry.lookup`):
  1. Exact match of the normalised name against entry names and aliases.
  2. Otherwise every entry name/alias that occurs inside the ingredient name as a
     contiguous run of whole words is a candidate; the longest one wins and equal
     lengths are decided alphabetically. "гръцко кисело мляко" therefore resolves
     to "кисело мляко", never to "мляко".
  3. No candidate -> None (the caller passes the quantity through unchanged).
A registry name is never matched by being a *prefix of a shorter* ingredient
name, so "мляко" cannot pick up the "кисело мляко" entry.
"""
import json
import logging
import re
from pathlib import Path
from threading import Lock
from types import MappingProxyType
from typing import Iterable, Optional

from nutriplan.domain.PackSize import PackSize
from nutriplan.domain.errors import CatalogError
from nutriplan.utilities.config import PACK_SIZES_FILE

logger = logging.getLogger(__name__)

_WS = re.compile(r"\s+")


def normalize_name(name: str) -> str:
    """Lower-case, trimmed, inner whitespace collapsed."""
    if not isinstance(name, str):
        return ""
    return _WS.sub(" ", name.strip().lower())


def _contains_words(haystack: tuple, needle: tuple) -> bool:
    n = len(needle)
    return any(haystack[i:i + n] == needle for i in range(len(haystack) - n + 1))


class PackSizeRegistry:
    def __init__(self, entries: Iterable[PackSize]):
        by_name = {}
        for entry in entries:
            for key in (entry.name, *entry.aliases):
                key = normalize_name(key)
                if key in by_name and by_name[key] is not entry:
                    raise CatalogError(f"Pack size name '{key}' is defined twice")
                by_name[key] = entry
        self._by_name = MappingProxyType(by_name)
        # longest first, then alphabetical: the order phase 2 resolves candidates in
        self._match_order = tuple(sorted(by_name, key=lambda k: (-len(k), k)))

    def canonical_name(self, name: str) -> str:
        '''Registry name for an exact name/alias hit, otherwise the normalised input.'''
        key = normalize_name(name)
        entry = self._by_name.get(key)
        return entry.name if entry is not None else key

    def lookup(self, name: str) -> Optional[PackSize]:
        key = normalize_name(name)
        if not key:
            return None
        entry = self._by_name.get(key)
        if entry is not None:
            return entry
        words = tuple(key.split(" "))
        for candidate in self._match_order:
            if _contains_words(words, tuple(candidate.split(" "))):
                return self._by_name[candidate]
        return None

    def __contains__(self, name) -> bool:
        return normalize_name(name) in self._by_name

    def __len__(self) -> int:
        return len({id(e) for e in self._by_name.values()})

    def entries(self):
        seen, result = set(), []
        for entry in self._by_name.values():
            if id(entry) not in seen:
                seen.add(id(entry))
                result.append(entry)
        return result

    @staticmethod
    def from_dict(data) -> "PackSizeRegistry":
        if not isinstance(data, list):
            raise CatalogError("Pack size registry must be a list of entries")
        return PackSizeRegistry(PackSize.from_dict(entry) for entry in data)

    @classmethod
    def read_from_json(cls, path) -> "PackSizeRegistry":
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise CatalogError(f"Pack size registry not found: {path}") from None
        except json.JSONDecodeError as e:
            raise CatalogError(f"Invalid JSON in pack size registry {path}: {e}") from e
        registry = cls.from_dict(data)
        logger.info("Loaded %d pack sizes from %s", len(registry), path)
        return registry


_lock = Lock()
_registry: Optional[PackSizeRegistry] = None


def get_registry() -> PackSizeRegistry:
    """Process-wide registry, read from PACK_SIZES_FILE on first use."""
    global _registry
    with _lock:
        if _registry is None:
            _registry = PackSizeRegistry.read_from_json(PACK_SIZES_FILE)
        return _registry


__all__ = ["PackSizeRegistry", "get_registry", "normalize_name"]
