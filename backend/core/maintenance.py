from django.conf import settings
from django.http import JsonResponse

from core.settings_resolver import get_bool, get_str


def maintenance_status(_request):
    """
    Public endpoint telling the frontend whether the platform is in maintenance mode.

    Always answers, even while maintenance mode is on, so the frontend can show a banner.
    """

    return JsonResponse(
        {
            "platform_name": get_str("platformName", settings.PLATFORM_NAME),
            "maintenance_mode": get_bool("maintenanceMode", False),
            "allow_new_registrations": get_bool("allowNewRegistrations", True),
        }
    )
