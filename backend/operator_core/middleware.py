import logging

from django.conf import settings
from django.http import HttpResponseNotFound, JsonResponse

from core.settings_resolver import get_bool

logger = logging.getLogger(__name__)

MAINTENANCE_MESSAGE = "The platform is under maintenance. Please try again later."

# Paths that keep working while maintenance mode is on.
MAINTENANCE_EXEMPT_PREFIXES = (
    "/admin/",
    "/api/operator/",
    "/api/users/token/",
    "/api/maintenance/",
)


class OpsOnlyRouteGatingMiddleware:
    """Hide the admin console and Django admin unless enabled and reached via an ops host."""

    def __init__(self, get_response):
        self.get_response = get_response
        self.allowed_hosts = {host.lower() for host in getattr(settings, "OPS_ALLOWED_HOSTS", [])}

    def __call__(self, request):
        path = request.path or ""

        if path.startswith("/admin/"):
            if not getattr(settings, "ENABLE_DJANGO_ADMIN", False) or not self._is_ops_host(
                request
            ):
                return HttpResponseNotFound()
        elif path.startswith("/api/operator/"):
            if not getattr(settings, "ENABLE_OPERATOR", False) or not self._is_ops_host(request):
                return HttpResponseNotFound()

        return self.get_response(request)

    def _is_ops_host(self, request):
        hostname = (request.get_host() or "").split(":", 1)[0].lower()
        return hostname in self.allowed_hosts


class MaintenanceModeMiddleware:
    """Answer public API calls with 503 while the ``maintenanceMode`` platform setting is on."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path or ""
        if (
            path.startswith("/api/")
            and not path.startswith(MAINTENANCE_EXEMPT_PREFIXES)
            and get_bool("maintenanceMode", False)
        ):
            logger.info("maintenance: rejected %s %s", request.method, path)
            return JsonResponse(
                {"success": False, "message": MAINTENANCE_MESSAGE},
                status=503,
            )
        return self.get_response(request)
