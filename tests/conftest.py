"""Shared fixtures for the test suite."""

import pytest
from django.contrib.auth import get_user_model

from apps.pages.libraries import PageLibrary, registry


class GalleryLibrary(PageLibrary):
    """Library used in tests that records clean-up calls."""

    name = "gallery"
    verbose_name = "Gallery"
    fields = {"photographer": {"type": "text", "label": "Photographer", "required": False}}

    def __init__(self):
        """Initialize the list of deleted page urls."""
        self.deleted: list[str] = []

    def on_delete(self, page) -> None:
        """Remember the deleted page."""
        self.deleted.append(page.url)


@pytest.fixture
def gallery_library():
    """Register a gallery library for the duration of a test."""
    library = registry.register(GalleryLibrary())
    yield library
    registry.unregister(library.name)


@pytest.fixture
def member_client(client, db):
    """Client logged in as a regular, non-staff user."""
    user = get_user_model().objects.create_user(username="member", password="pass12345")
    client.force_login(user)
    return client
