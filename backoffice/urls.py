from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView

urlpatterns = [
    path("", RedirectView.as_view(pattern_name="backend:dashboard", permanent=False)),
    path("admin/", admin.site.urls),
    path("accounts/", include("django.contrib.auth.urls")),
    path("backend/", include("backend.urls")),
    # Content router: API endpoints and public record pages
    path("", include("content.urls")),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
