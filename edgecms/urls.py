"""
URL configuration for the edgecms project.

The Fastly endpoints live under ``/api/v1/fastly/``, the purge queue under
``/api/v1/purge/`` and the diagnostic checks under ``/api/v1/diagnostics/``.
"""
from django.contrib import admin
from django.urls import include, path

from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/v1/fastly/", include("fastly_cdn.urls", namespace="fastly_cdn")),
    path("api/v1/purge/", include("fastly_purger.urls", namespace="fastly_purger")),
    path("api/v1/diagnostics/", include("core.diagnostics_urls", namespace="diagnostics")),
    path("api/schema/", SpectacularAPIView.as_view(api_version="1.0"), name="api-schema"),
    path(
        "api/schema/swagger/",
        SpectacularSwaggerView.as_view(url_name="api-schema"),
        name="api-swagger-ui",
    ),
    path(
        "api/schema/redoc/",
        SpectacularRedocView.as_view(url_name="api-schema"),
        name="api-redoc",
    ),
]
