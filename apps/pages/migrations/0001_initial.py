"""Create the Page model."""

from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):
    """Initial migration for pages app."""

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Page",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "title",
                    models.CharField(help_text="Page title displayed in header and browser tab", max_length=200),
                ),
                (
                    "url",
                    models.SlugField(
                        blank=True,
                        help_text="Pretty URL for the page (generated from the title if empty)",
                        max_length=255,
                        unique=True,
                    ),
                ),
                ("body", models.TextField(blank=True, help_text="Main content in Markdown format")),
                (
                    "library",
                    models.CharField(
                        blank=True, help_text="Library the page was created with", max_length=100, null=True
                    ),
                ),
                (
                    "data",
                    models.JSONField(blank=True, default=dict, help_text="Values for fields added by the page's library"),
                ),
                (
                    "created_at",
                    models.DateTimeField(default=django.utils.timezone.now, help_text="When the page was created"),
                ),
                ("updated_at", models.DateTimeField(auto_now=True, help_text="When the page was last updated")),
            ],
            options={
                "verbose_name": "Page",
                "verbose_name_plural": "Pages",
                "ordering": ["id"],
            },
        ),
    ]
