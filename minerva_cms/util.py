"""General utilities used throughout the site.

Holds the unique pretty-url generator used by models that expose a ``url``
slug, a recursive containment check, and a unique token generator.
"""

import hashlib
import secrets
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol

from django.db import models

# Container types whose members are walked by in_array_recursive
_NESTED_TYPES = (list, tuple, set, frozenset, dict)


@dataclass(frozen=True)
class FoundRecord:
    """An existing record returned by a url lookup.

    Attributes:
        id: The record identifier (int, str or a structured document id).
        url: The record's stored url slug.

    """

    id: Any
    url: str


class RecordFinder(Protocol):
    """Anything that can search stored records by url substring."""

    def find_by_url_contains(self, pattern: str) -> Iterable[FoundRecord]:
        """Return every record whose url contains ``pattern``."""
        ...


class ModelRecordFinder:
    """RecordFinder backed by a Django model with a ``url`` field."""

    def __init__(self, model: type[models.Model], field: str = "url"):
        """Initialize the finder.

        Args:
            model: Model class to query.
            field: Name of the slug field on the model.

        """
        self.model = model
        self.field = field

    def find_by_url_contains(self, pattern: str) -> list[FoundRecord]:
        """Run a single ``contains`` query against the model.

        Args:
            pattern: Substring to look for in the url field.

        Returns:
            Matching records as (id, url) pairs.

        """
        rows = self.model._default_manager.filter(**{f"{self.field}__contains": pattern}).values_list(
            "pk", self.field
        )
        return [FoundRecord(id=pk, url=url) for pk, url in rows]


def same_identifier(record_id: Any, other_id: Any) -> bool:
    """Compare two record identifiers.

    Identifiers of the same concrete type are compared natively. When the
    types differ (e.g. an ObjectId against a str, or an int against a str
    from a URL) their string representations are compared instead.

    Args:
        record_id: Identifier of a stored record.
        other_id: Identifier to compare against, may be None.

    Returns:
        True if both identify the same record.

    """
    if other_id is None:
        return record_id is None
    if type(record_id) is type(other_id):
        return record_id == other_id
    return str(record_id) == str(other_id)


def unique_url(
    url: str | None,
    lookup: RecordFinder | None,
    exclude_id: Any = None,
    separator: str = "-",
    max_length: int | None = None,
) -> str | None:
    """Generate a unique pretty url for a record.

    Existing records whose url contains ``url`` are fetched in one query.
    Records other than ``exclude_id`` form the conflict set, and a numeric
    suffix (``-1``, ``-2``, ...) is appended until the url is not taken.

    With ``max_length`` the base is trimmed so base plus suffix fits. When
    trimming shortens the base below the queried pattern, the shorter stem
    is looked up too, since its suffixed urls would not contain the
    original pattern.

    Args:
        url: The requested url, typically the slugified title.
        lookup: Finder used to search existing records.
        exclude_id: Id of the record being edited so it never conflicts
            with itself.
        separator: Joins the base url and the counter.
        max_length: Maximum length of the returned url, if any.

    Returns:
        The unique lowercase url, or None when url or lookup is missing.

    """
    if not url or lookup is None:
        return None

    base = url.lower()[:max_length] if max_length else url.lower()
    pattern = base
    conflicts = _find_conflicts(lookup, pattern, exclude_id)
    if not conflicts:
        return base

    counter = 1
    while True:
        suffix = f"{separator}{counter}"
        stem = base[: max_length - len(suffix)] if max_length else base
        if len(stem) < len(pattern):
            pattern = stem
            conflicts |= _find_conflicts(lookup, pattern, exclude_id)
        candidate = f"{stem}{suffix}".lower()
        if candidate not in conflicts:
            return candidate
        counter += 1


def _find_conflicts(lookup: RecordFinder, pattern: str, exclude_id: Any) -> set[str]:
    """Return urls containing pattern that belong to other records."""
    return {
        record.url for record in lookup.find_by_url_contains(pattern) if not same_identifier(record.id, exclude_id)
    }


def in_array_recursive(needle: Any = None, haystack: Any = None) -> bool:
    """Check whether a value appears anywhere in a nested structure.

    Leaves must match strictly: same type and equal value, so ``1`` does not
    match ``1.0`` or ``True``. Dict values are searched, keys are not.

    Args:
        needle: The value to look for.
        haystack: A list, tuple, set or dict, possibly nested.

    Returns:
        True if found. False otherwise, when either argument is empty, or
        when haystack is not a container.

    """
    if not needle or not haystack or not isinstance(haystack, _NESTED_TYPES):
        return False

    stack = [haystack]
    while stack:
        current = stack.pop()
        members = current.values() if isinstance(current, dict) else current
        for element in members:
            if isinstance(element, _NESTED_TYPES):
                stack.append(element)
            elif type(element) is type(needle) and element == needle:
                return True
    return False


def unique_string(hash: str | None = "md5", prefix: str = "", entropy: bool = False) -> str:  # noqa: A002
    """Return a unique string, useful for approval codes and such.

    An md5 hash is 32 characters long and a sha1 hash 40. Unhashed, the id
    is 13 characters long (23 with entropy) plus the prefix.

    Args:
        hash: "md5", "sha1", or None/False for the raw id.
        prefix: Prepended to the raw id before hashing.
        entropy: Append a random fragment to the raw id.

    Returns:
        The unique string.

    Raises:
        ValueError: If hash is not a supported method.

    """
    now = time.time()
    seconds = int(now)
    micros = int((now - seconds) * 1_000_000)
    uid = f"{prefix}{seconds:08x}{micros:05x}"
    if entropy:
        uid += f"{secrets.randbelow(10)}.{secrets.randbelow(10**8):08d}"

    if not hash:
        return uid
    if hash == "md5":
        return hashlib.md5(uid.encode()).hexdigest()  # noqa: S324
    if hash == "sha1":
        return hashlib.sha1(uid.encode()).hexdigest()  # noqa: S324
    raise ValueError(f"Unsupported hash method: {hash!r}")
