"""
Django AppConfig do Inventoria.
"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class InventoriaConfig(AppConfig):
    name = "inventoria"
    label = "inventoria"
    verbose_name = _("Inventoria")
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        """Conecta signals de invalidação do cache de Generators."""
        from inventoria import signals  # noqa: F401
