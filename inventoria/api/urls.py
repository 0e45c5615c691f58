from __future__ import annotations

from django.http import JsonResponse
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import CustomIdFormatViewSet, InventoryViewSet


def health_check(request):
    """
    Healthcheck endpoint para monitoramento.

    Returns:
        200 OK com {"status": "healthy", "version": "X.X.X"}
    """
    from inventoria import __version__

    return JsonResponse({
        "status": "healthy",
        "version": __version__,
    })


router = DefaultRouter(trailing_slash=False)
router.register("inventories", InventoryViewSet, basename="inventories")
router.register("custom-id-format", CustomIdFormatViewSet, basename="custom-id-format")

urlpatterns = [
    path("health", health_check, name="health-check"),
    path("", include(router.urls)),
]
