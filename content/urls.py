from django.urls import path
from . import views

app_name = "content"

urlpatterns = [
    path("api/", views.api_entrypoint, name="api_entrypoint"),
    path("api/contents/<slug:content_type>/", views.contents, name="contents"),
    # Public record pages: /page/about/, /entry/hello-world/, ...
    path("<slug:singular_slug>/<slug:slug>/", views.record, name="record"),
]
