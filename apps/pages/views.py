"""Views for pages app.

Static pages are *viewed* from templates on disk, database pages are *read*.
The database actions follow CRUD naming: index, create, read, update, delete.
"""

import math

import logfire
import markdown
from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import PermissionDenied
from django.http import Http404, HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.template import TemplateDoesNotExist
from django.template.loader import get_template

from apps.pages.forms import PageForm
from apps.pages.libraries import CORE_LIBRARY_NAMES, PageLibrary, registry
from apps.pages.models import Page

MARKDOWN_EXTENSIONS = ["extra", "toc", "nl2br"]


def _get_library(name: str | None) -> PageLibrary | None:
    """Resolve a library name from the URL.

    Args:
        name: Library name, None/empty/"app" for the core app.

    Returns:
        The library or None for the core app.

    Raises:
        Http404: If a library name is given but not registered.

    """
    library = registry.get(name)
    if library is None and name and name not in CORE_LIBRARY_NAMES:
        logfire.warning("Page library not found", library=name)
        raise Http404("Library not found")
    return library


def _check_pages_admin(user) -> bool:
    """Check if user can manage pages.

    Args:
        user: The user to check.

    Returns:
        True if user is staff or superuser.

    """
    return user.is_superuser or user.is_staff


def view(request: HttpRequest, path: str = "home") -> HttpResponse:
    """Display a static page from the templates on disk.

    Args:
        request: The HTTP request.
        path: Slash separated template path under pages/static/.

    Returns:
        Rendered static template.

    Raises:
        Http404: If the path is invalid or no template exists.

    """
    segments = [segment for segment in path.split("/") if segment]
    if not segments or any(segment in (".", "..") for segment in segments):
        logfire.warning("Invalid static page path", path=path)
        raise Http404("Page not found")

    template_name = "pages/static/{}.html".format("/".join(segments))
    try:
        template = get_template(template_name)
    except TemplateDoesNotExist:
        logfire.warning("Static page not found", path=path)
        raise Http404("Page not found") from None

    return HttpResponse(template.render({"path": path}, request))


def index(
    request: HttpRequest,
    library: str | None = None,
    page: int = 1,
    limit: int | None = None,
) -> HttpResponse:
    """List pages with pagination.

    Args:
        request: The HTTP request.
        library: Optional library name narrowing the listing.
        page: One-based page number, 0 is treated as 1.
        limit: Records per page, defaults to PAGES_PER_PAGE.

    Returns:
        Rendered page list template.

    """
    page_library = _get_library(library)
    page = page or 1
    limit = limit or settings.PAGES_PER_PAGE

    pages = Page.objects.order_by("id")
    if page_library is not None:
        pages = page_library.filter_queryset(pages)

    offset = (page - 1) * limit
    records = pages[offset : offset + limit]
    total = pages.count()

    logfire.info(
        "Page index viewed",
        library=library,
        page=page,
        limit=limit,
        total=total,
    )

    context = {
        "records": records,
        "limit": limit,
        "page": page,
        "total": total,
        "page_count": math.ceil(total / limit),
        "library": page_library,
    }
    return render(request, "pages/index.html", context)


@login_required
def create(request: HttpRequest, library: str | None = None) -> HttpResponse:
    """Create a page, optionally through a library.

    Args:
        request: The HTTP request.
        library: Optional library deciding which extra fields are shown.

    Returns:
        Rendered form or redirect to the index on success.

    Raises:
        PermissionDenied: If user lacks admin permissions.

    """
    if not _check_pages_admin(request.user):
        logfire.warning("Page create access denied", user_id=request.user.id)
        raise PermissionDenied("You don't have permission to create pages.")

    page_library = _get_library(library)

    if request.method == "POST":
        form = PageForm(request.POST, library=page_library)
        if form.is_valid():
            page = form.save()
            logfire.info(
                "Page created",
                page_id=page.id,
                url=page.url,
                library=page.library,
                user_id=request.user.id,
            )
            messages.success(request, f"Page '{page.title}' created successfully.")
            return redirect("pages:index")
        logfire.warning(
            "Page create form invalid",
            user_id=request.user.id,
            errors=form.errors.as_json(),
        )
    else:
        form = PageForm(library=page_library)

    context = {
        "form": form,
        "library": page_library,
        "is_edit": False,
    }
    return render(request, "pages/form.html", context)


def read(request: HttpRequest, url: str) -> HttpResponse:
    """Read a page from the database.

    Args:
        request: The HTTP request.
        url: The page url.

    Returns:
        Rendered page template.

    Raises:
        Http404: If page not found.

    """
    try:
        record = Page.objects.get(url=url)
    except Page.DoesNotExist:
        logfire.warning("Page not found", url=url)
        raise Http404("Page not found") from None

    page_library = registry.get(record.library)

    body_html = ""
    if record.body:
        body_html = markdown.markdown(record.body, extensions=MARKDOWN_EXTENSIONS)

    logfire.info("Page read", url=url, page_id=record.id)

    context = {
        "record": record,
        "body_html": body_html,
        "library": page_library,
    }
    return render(request, "pages/read.html", context)


@login_required
def update(request: HttpRequest, url: str) -> HttpResponse:
    """Update a page, including the fields of its library.

    Args:
        request: The HTTP request.
        url: The page url.

    Returns:
        Rendered form or redirect to the index on success.

    Raises:
        PermissionDenied: If user lacks admin permissions.

    """
    if not _check_pages_admin(request.user):
        logfire.warning("Page update access denied", user_id=request.user.id, url=url)
        raise PermissionDenied("You don't have permission to update pages.")

    record = get_object_or_404(Page, url=url)
    page_library = registry.get(record.library)

    if request.method == "POST":
        form = PageForm(request.POST, instance=record, library=page_library)
        if form.is_valid():
            record = form.save()
            logfire.info(
                "Page updated",
                page_id=record.id,
                url=record.url,
                user_id=request.user.id,
            )
            messages.success(request, f"Page '{record.title}' updated successfully.")
            return redirect("pages:index")
        logfire.warning(
            "Page update form invalid",
            user_id=request.user.id,
            page_id=record.id,
            errors=form.errors.as_json(),
        )
    else:
        form = PageForm(instance=record, library=page_library)

    context = {
        "form": form,
        "record": record,
        "library": page_library,
        "is_edit": True,
    }
    return render(request, "pages/form.html", context)


@login_required
def delete(request: HttpRequest, url: str | None = None) -> HttpResponse:
    """Delete a page, letting its library clean up first.

    Args:
        request: The HTTP request.
        url: The page url.

    Returns:
        Redirect to the index, or the confirmation page on GET.

    Raises:
        PermissionDenied: If user lacks admin permissions.

    """
    if not url:
        return redirect("pages:index")

    if not _check_pages_admin(request.user):
        logfire.warning("Page delete access denied", user_id=request.user.id, url=url)
        raise PermissionDenied("You don't have permission to delete pages.")

    record = get_object_or_404(Page, url=url)

    if request.method == "POST":
        page_library = registry.get(record.library)
        if page_library is not None:
            page_library.on_delete(record)
        title = record.title
        record.delete()
        logfire.info(
            "Page deleted",
            page_title=title,
            url=url,
            user_id=request.user.id,
        )
        messages.success(request, f"Page '{title}' deleted successfully.")
        return redirect("pages:index")

    return render(request, "pages/delete.html", {"record": record})
