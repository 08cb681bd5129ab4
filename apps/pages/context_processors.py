"""Context processors for pages app."""

from django.http import HttpRequest

from apps.pages.libraries import PageLibrary, registry


def page_libraries(request: HttpRequest) -> dict[str, list[PageLibrary]]:
    """Make the registered page libraries available to all templates.

    Args:
        request: The HTTP request.

    Returns:
        Dictionary with 'page_libraries' containing the registered libraries.

    """
    return {"page_libraries": registry.all()}
