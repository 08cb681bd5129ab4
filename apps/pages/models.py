"""Models for pages app."""

from typing import ClassVar

from django.conf import settings
from django.db import models
from django.urls import reverse
from django.utils import timezone
from django.utils.text import slugify

from minerva_cms.util import ModelRecordFinder, unique_url


class Page(models.Model):
    """A web page stored in the database.

    A page may be created through a library (a content type) which adds its
    own fields. Values for those fields are kept in ``data``.

    Attributes:
        title: Display title for the page.
        url: Unique pretty url, generated from the title when left blank.
        body: Markdown content for the main body.
        library: Name of the library used to create the page, if any.
        data: Values for library-contributed fields.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.

    """

    # Core form fields, in display order. Libraries add their own on top.
    fields: ClassVar[dict[str, dict]] = {
        "title": {"type": "text", "label": "Title"},
        "url": {"type": "text", "label": "Pretty URL"},
        "body": {"type": "textarea", "label": "Body"},
    }

    title = models.CharField(
        max_length=200,
        help_text="Page title displayed in header and browser tab",
    )
    url = models.SlugField(
        max_length=255,
        unique=True,
        blank=True,
        help_text="Pretty URL for the page (generated from the title if empty)",
    )
    body = models.TextField(
        blank=True,
        help_text="Main content in Markdown format",
    )
    library = models.CharField(
        max_length=100,
        blank=True,
        null=True,
        help_text="Library the page was created with",
    )
    data = models.JSONField(
        default=dict,
        blank=True,
        help_text="Values for fields added by the page's library",
    )

    created_at = models.DateTimeField(
        default=timezone.now,
        help_text="When the page was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the page was last updated",
    )

    class Meta:
        """Meta options for Page model."""

        verbose_name = "Page"
        verbose_name_plural = "Pages"
        ordering: ClassVar[list[str]] = ["id"]

    def __str__(self) -> str:
        """Return string representation of page.

        Returns:
            The page title.

        """
        return self.title

    @classmethod
    def key(cls) -> str:
        """Return the name of the primary key field."""
        return cls._meta.pk.name

    def save(self, *args, **kwargs):
        """Make the url unique before saving.

        An existing page whose url is unchanged keeps it as is, even when
        suffixed siblings (``news-1``) share its base.
        """
        if self._has_stored_url():
            self.url = self.url.lower()
        else:
            requested = self.url or slugify(self.title) or "page"
            self.url = unique_url(
                requested,
                ModelRecordFinder(Page),
                exclude_id=self.pk,
                separator=settings.PAGES_SLUG_SEPARATOR,
                max_length=self._meta.get_field("url").max_length,
            )
        super().save(*args, **kwargs)

    def _has_stored_url(self) -> bool:
        """Check if this page is saved and its url matches the stored one, ignoring case."""
        if self.pk is None or not self.url:
            return False
        stored = Page.objects.filter(pk=self.pk).values_list("url", flat=True).first()
        return stored == self.url.lower()

    def get_absolute_url(self) -> str:
        """Return the absolute URL for this page.

        Returns:
            URL path to the page read view.

        """
        return reverse("pages:read", kwargs={"url": self.url})

    @property
    def uses_library(self) -> bool:
        """Check if page was created through a library.

        Returns:
            True if library is set to something other than the core app.

        """
        return bool(self.library) and self.library != "app"
