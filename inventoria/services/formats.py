"""
FormatService — Salva o formato de ID de um inventário.
"""

from __future__ import annotations

import logging

from django.db import transaction

from inventoria.custom_ids import cache
from inventoria.custom_ids.types import FormatSpec
from inventoria.custom_ids.validation import parse_format
from inventoria.exceptions import ValidationError
from inventoria.models import Inventory


logger = logging.getLogger(__name__)


class FormatService:
    """
    Escrita do FormatSpec de um inventário.

    O Generator antigo só sai do cache depois do commit, então toda geração
    iniciada após o save já compila o formato novo.
    """

    @staticmethod
    @transaction.atomic
    def save_format(inventory_id, format_data) -> Inventory:
        """
        Valida e persiste um novo formato.

        Args:
            inventory_id: ID do inventário
            format_data: FormatSpec, dict `{"elements": [...]}` ou string JSON

        Returns:
            Inventory atualizado (custom_id_format_version incrementado).

        Raises:
            ValidationError: Se o formato for inválido.
            Inventory.DoesNotExist: Se o inventário não existe.
        """
        spec = parse_format(format_data)

        inventory = Inventory.objects.select_for_update().get(pk=inventory_id)
        old_fingerprint = FormatService.fingerprint_of(inventory.custom_id_format)

        inventory.custom_id_format = spec.to_dict()
        inventory.custom_id_format_version += 1
        inventory.save(update_fields=["custom_id_format", "custom_id_format_version", "updated_at"])

        if old_fingerprint and old_fingerprint != spec.fingerprint:
            transaction.on_commit(lambda: cache.invalidate(old_fingerprint))

        logger.info(
            "Custom ID format saved",
            extra={
                "inventory_id": str(inventory.pk),
                "version": inventory.custom_id_format_version,
                "fingerprint": spec.fingerprint,
            },
        )
        return inventory

    @staticmethod
    @transaction.atomic
    def clear_format(inventory_id) -> Inventory:
        """Remove o formato; novos itens passam a exigir custom_id manual."""
        inventory = Inventory.objects.select_for_update().get(pk=inventory_id)
        old_fingerprint = FormatService.fingerprint_of(inventory.custom_id_format)

        inventory.custom_id_format = None
        inventory.custom_id_format_version += 1
        inventory.save(update_fields=["custom_id_format", "custom_id_format_version", "updated_at"])

        if old_fingerprint:
            transaction.on_commit(lambda: cache.invalidate(old_fingerprint))
        return inventory

    @staticmethod
    def fingerprint_of(format_data) -> str | None:
        """Fingerprint de um formato salvo; None se ausente ou corrompido."""
        if not format_data:
            return None
        try:
            return FormatSpec.from_dict(format_data).fingerprint
        except ValidationError:
            return None
