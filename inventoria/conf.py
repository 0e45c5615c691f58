from __future__ import annotations

from django.conf import settings
from django.utils.module_loading import import_string


INVENTORIA_DEFAULTS = {
    "MAX_GENERATION_ATTEMPTS": 5,
    "GENERATOR_CACHE_SIZE": 256,
    "DATETIME_USE_LOCALTIME": False,
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.IsAuthenticated"],
    "FORMAT_EDIT_PERMISSION_CLASSES": ["rest_framework.permissions.IsAdminUser"],
}


def get_inventoria_setting(key: str):
    """Retrieve an Inventoria setting, falling back to INVENTORIA_DEFAULTS."""
    user_settings = getattr(settings, "INVENTORIA", {})
    value = user_settings.get(key, INVENTORIA_DEFAULTS.get(key))
    if isinstance(value, list) and value and isinstance(value[0], str):
        return [import_string(cls) for cls in value]
    return value
