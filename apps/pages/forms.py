"""Forms for pages app."""

from typing import ClassVar

from django import forms

from apps.pages.libraries import PageLibrary
from apps.pages.models import Page

INPUT_CLASS = "input input-bordered w-full"
TEXTAREA_CLASS = "textarea textarea-bordered w-full"


def _build_field(options: dict) -> forms.Field:
    """Build a form field from library field options.

    Args:
        options: Field options with type, label and required keys.

    Returns:
        A CharField with a widget matching the option type.

    """
    if options.get("type") == "textarea":
        widget = forms.Textarea(attrs={"class": TEXTAREA_CLASS, "rows": 4})
    else:
        widget = forms.TextInput(attrs={"class": INPUT_CLASS})
    return forms.CharField(
        label=options.get("label"),
        required=options.get("required", False),
        widget=widget,
    )


class PageForm(forms.ModelForm):
    """Form for creating and updating pages, with optional library fields."""

    class Meta:
        """Form metadata."""

        model = Page
        fields: ClassVar[list[str]] = list(Page.fields)
        labels: ClassVar[dict[str, str]] = {name: options["label"] for name, options in Page.fields.items()}
        widgets: ClassVar[dict] = {
            "title": forms.TextInput(attrs={"class": INPUT_CLASS, "placeholder": "Page Title"}),
            "url": forms.TextInput(attrs={"class": INPUT_CLASS, "placeholder": "generated-from-title"}),
            "body": forms.Textarea(
                attrs={
                    "class": f"{TEXTAREA_CLASS} font-mono",
                    "rows": 15,
                    "placeholder": "Write your content in Markdown format...",
                }
            ),
        }

    def __init__(self, *args, library: PageLibrary | None = None, **kwargs):
        """Initialize form and add the library's fields.

        Args:
            *args: Positional form arguments.
            library: Library whose fields are added to the form.
            **kwargs: Keyword form arguments.

        """
        super().__init__(*args, **kwargs)
        self.library = library
        self.library_fields = list(library.fields) if library else []
        for name, options in (library.fields.items() if library else ()):
            self.fields[name] = _build_field(options)
            self.initial.setdefault(name, self.instance.data.get(name, ""))

    def validate_unique(self):
        """Validate uniqueness except for url, which Page.save() resolves."""
        exclude = self._get_validation_exclusions()
        exclude.add("url")
        try:
            self.instance.validate_unique(exclude=exclude)
        except forms.ValidationError as e:
            self._update_errors(e)

    def save(self, commit: bool = True) -> Page:
        """Save the page, storing library field values and library name.

        Args:
            commit: Whether to write the page to the database.

        Returns:
            The saved page.

        """
        page = super().save(commit=False)
        if self.library is not None:
            page.library = self.library.name
            page.data = {**page.data, **{name: self.cleaned_data.get(name, "") for name in self.library_fields}}
        if commit:
            page.save()
        return page
