"""Admin configuration for pages app."""

from typing import ClassVar

from django.contrib import admin
from django.utils.html import format_html

from apps.pages.libraries import registry
from apps.pages.models import Page


@admin.register(Page)
class PageAdmin(admin.ModelAdmin):
    """Admin configuration for Page model."""

    list_display: ClassVar[list[str]] = [
        "title",
        "url",
        "library_badge",
        "updated_at",
    ]
    list_filter: ClassVar[list[str]] = ["library"]
    search_fields: ClassVar[list[str]] = ["title", "url", "body"]
    readonly_fields: ClassVar[list[str]] = ["created_at", "updated_at"]

    fieldsets = (
        (
            None,
            {
                "fields": ("title", "url", "library"),
                "description": "Leave the URL empty to generate it from the title.",
            },
        ),
        (
            "Content",
            {
                "fields": ("body",),
                "description": "Main page content in Markdown format.",
            },
        ),
        (
            "Library Data",
            {
                "fields": ("data",),
                "classes": ("collapse",),
                "description": "Values for the fields added by the page's library.",
            },
        ),
        (
            "Metadata",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def delete_model(self, request, obj):
        """Let the page's library clean up before deleting."""
        library = registry.get(obj.library)
        if library is not None:
            library.on_delete(obj)
        super().delete_model(request, obj)

    @admin.display(description="Library")
    def library_badge(self, obj) -> str:
        """Display the library as a colored badge.

        Args:
            obj: The Page object.

        Returns:
            HTML formatted library badge.

        """
        if obj.uses_library:
            return format_html('<span style="color: green; font-weight: bold;">{}</span>', obj.library)
        return format_html('<span style="color: gray;">{}</span>', "app")
