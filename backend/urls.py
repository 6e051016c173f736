from django.urls import path
from . import views

app_name = "backend"

urlpatterns = [
    path("", views.dashboard, name="dashboard"),
    path("content/<slug:content_type>/", views.content_overview, name="content_overview"),
    path("content/<slug:content_type>/new/", views.content_new, name="content_new"),
    path("edit/<int:pk>/", views.content_edit, name="content_edit"),
    path("users/", views.users, name="users"),
    path("filemanager/<slug:area>/", views.filemanager, name="filemanager"),
    # The file to edit is passed as ?file=/path/inside/area
    path("file-edit/<slug:area>/", views.file_edit, name="file_edit"),
    path("clear-cache/", views.clear_cache, name="clear_cache"),
    path("translations/", views.translations, name="translations"),
    path("kitchensink/", views.kitchensink, name="kitchensink"),
    path("about/", views.about, name="about"),
    path("api/menu/", views.api_menu, name="api_menu"),
]
