"""Page libraries (content types) that extend the core Page.

A library contributes extra form fields, can narrow index listings, and can
clean up after a page is deleted. Libraries are registered by name and
looked up through the module-level ``registry``.
"""

from typing import ClassVar

import logfire
from django.db.models import QuerySet

# Library names that mean "the core app, no library"
CORE_LIBRARY_NAMES = frozenset({"", "app"})


class PageLibrary:
    """Base class for page libraries.

    Attributes:
        name: Name used in URLs and stored on Page.library.
        verbose_name: Human readable name.
        fields: Extra form fields, name to options (type, label, required).

    """

    name: ClassVar[str] = ""
    verbose_name: ClassVar[str] = ""
    fields: ClassVar[dict[str, dict]] = {}

    def filter_queryset(self, queryset: QuerySet) -> QuerySet:
        """Narrow an index listing to this library's pages."""
        return queryset.filter(library=self.name)

    def on_delete(self, page) -> None:
        """Run clean-up for a page that is about to be deleted."""


class BlogLibrary(PageLibrary):
    """Blog posts: pages with an author and a short summary."""

    name = "blog"
    verbose_name = "Blog"
    fields: ClassVar[dict[str, dict]] = {
        "author": {"type": "text", "label": "Author", "required": True},
        "summary": {"type": "textarea", "label": "Summary", "required": False},
    }


class LibraryRegistry:
    """Explicit registry of page libraries keyed by name."""

    def __init__(self):
        """Initialize an empty registry."""
        self._libraries: dict[str, PageLibrary] = {}

    def register(self, library: PageLibrary) -> PageLibrary:
        """Register a library, replacing any library with the same name.

        Args:
            library: The library instance.

        Returns:
            The registered library.

        Raises:
            ValueError: If the library has a reserved or empty name.

        """
        if library.name in CORE_LIBRARY_NAMES:
            raise ValueError(f"Invalid library name: {library.name!r}")
        self._libraries[library.name] = library
        logfire.debug("Page library registered", library=library.name)
        return library

    def unregister(self, name: str) -> None:
        """Remove a library if it is registered."""
        self._libraries.pop(name, None)

    def get(self, name: str | None) -> PageLibrary | None:
        """Look up a library by name.

        Args:
            name: Library name, may be None, empty or "app".

        Returns:
            The library, or None for the core app and unknown names.

        """
        if not name or name in CORE_LIBRARY_NAMES:
            return None
        library = self._libraries.get(name)
        if library is None:
            logfire.debug("Unknown page library requested", library=name)
        return library

    def names(self) -> list[str]:
        """Return registered library names in sorted order."""
        return sorted(self._libraries)

    def all(self) -> list[PageLibrary]:
        """Return registered libraries sorted by name."""
        return [self._libraries[name] for name in self.names()]


registry = LibraryRegistry()
