from __future__ import annotations

import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


class Inventory(models.Model):
    """
    Inventário: dono do namespace de IDs customizados dos seus itens.

    custom_id_format segue o formato JSON do editor:
    {
      "elements": [
        {"type": "FIXED_TEXT", "value": "EQ-"},
        {"type": "SEQUENCE", "options": {"leadingZeros": true, "minDigits": 3}}
      ]
    }

    Só é alterado via FormatService.save_format (valida + invalida cache).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(_("nome"), max_length=255)

    custom_id_format = models.JSONField(_("formato de ID customizado"), null=True, blank=True)
    custom_id_format_version = models.PositiveIntegerField(_("versão do formato"), default=0)

    created_at = models.DateTimeField(_("criado em"), auto_now_add=True)
    updated_at = models.DateTimeField(_("atualizado em"), auto_now=True)

    class Meta:
        app_label = "inventoria"
        verbose_name = _("inventário")
        verbose_name_plural = _("inventários")
        ordering = ("name", "created_at")

    def __str__(self) -> str:
        return self.name

    @property
    def has_custom_id_format(self) -> bool:
        # Qualquer valor não vazio passa por parse_format; lixo vira ValidationError
        return bool(self.custom_id_format)

    def get_format_spec(self):
        """
        Retorna o FormatSpec validado ou None se o inventário não tem formato.

        Raises:
            ValidationError: Se o formato salvo estiver corrompido.
        """
        if not self.has_custom_id_format:
            return None
        from inventoria.custom_ids.validation import parse_format

        return parse_format(self.custom_id_format)
