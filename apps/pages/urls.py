"""URL configuration for pages app."""

from django.urls import path

from apps.pages import views

app_name = "pages"

urlpatterns = [
    # Static pages from disk
    path("", views.view, name="home"),
    path("page/<path:path>/", views.view, name="view"),
    # Index listings (page-only pattern must come before the library patterns)
    path("pages/index/", views.index, name="index"),
    path("pages/index/page:<int:page>/", views.index, name="index"),
    path("pages/index/page:<int:page>/limit:<int:limit>/", views.index, name="index"),
    path("pages/index/<str:library>/", views.index, name="index"),
    path("pages/index/<str:library>/page:<int:page>/", views.index, name="index"),
    path("pages/index/<str:library>/page:<int:page>/limit:<int:limit>/", views.index, name="index"),
    # Database pages
    path("pages/create/", views.create, name="create"),
    path("pages/create/<str:library>/", views.create, name="create"),
    path("pages/read/<slug:url>/", views.read, name="read"),
    path("pages/update/<slug:url>/", views.update, name="update"),
    path("pages/delete/", views.delete, name="delete"),
    path("pages/delete/<slug:url>/", views.delete, name="delete"),
]
