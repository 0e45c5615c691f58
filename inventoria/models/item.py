from __future__ import annotations

import uuid

from django.db import models
from django.utils.translation import gettext_lazy as _


class Item(models.Model):
    """
    Item de um inventário.

    custom_id é único dentro do inventário (case-sensitive). A constraint no
    banco é a autoridade final: a consulta prévia (oracle) não fecha a janela
    de corrida entre requisições concorrentes.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    inventory = models.ForeignKey(
        "inventoria.Inventory",
        on_delete=models.CASCADE,
        related_name="items",
        verbose_name=_("inventário"),
    )
    custom_id = models.TextField(_("ID customizado"))
    data = models.JSONField(_("dados"), default=dict, blank=True)

    created_at = models.DateTimeField(_("criado em"), auto_now_add=True)

    class Meta:
        app_label = "inventoria"
        verbose_name = _("item")
        verbose_name_plural = _("itens")
        ordering = ("created_at",)
        constraints = [
            models.UniqueConstraint(
                fields=["inventory", "custom_id"],
                name="unique_item_custom_id_per_inventory",
            ),
        ]

    def __str__(self) -> str:
        return self.custom_id
