"""
Inventoria Django Adapters — Implementações dos protocols sobre o ORM.

Uso:
    from inventoria.adapters import ItemUniquenessOracle
    from inventoria.services import CustomIdService

    CustomIdService.generate(inventory.pk, spec, ItemUniquenessOracle())
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from django.db import IntegrityError, transaction
from django.utils import timezone

from inventoria.exceptions import UniqueConstraintViolation
from inventoria.models import Item

logger = logging.getLogger(__name__)


class ItemUniquenessOracle:
    """
    Consulta se um custom_id já existe no inventário.

    Args:
        exclude_item_id: Ignora um item (edição do próprio item)
    """

    def __init__(self, exclude_item_id: Any = None):
        self.exclude_item_id = exclude_item_id

    def exists(self, inventory_id: Any, candidate_id: str) -> bool:
        queryset = Item.objects.filter(inventory_id=inventory_id, custom_id=candidate_id)
        if self.exclude_item_id is not None:
            queryset = queryset.exclude(pk=self.exclude_item_id)
        return queryset.exists()


class ItemCountSequenceCounter:
    """Sequência = quantidade atual de itens do inventário."""

    def current(self, inventory_id: Any) -> int:
        return Item.objects.filter(inventory_id=inventory_id).count()


class ItemModelInserter:
    """
    INSERT via ORM dentro de um savepoint.

    A constraint `unique_item_custom_id_per_inventory` é quem decide a corrida:
    IntegrityError vira UniqueConstraintViolation e o savepoint é desfeito.
    """

    def insert(self, inventory_id: Any, custom_id: str, data: dict) -> Item:
        try:
            with transaction.atomic():
                return Item.objects.create(inventory_id=inventory_id, custom_id=custom_id, data=data)
        except IntegrityError as exc:
            # Só traduz se o conflito é mesmo de custom_id (FK inválida etc. propagam)
            if not Item.objects.filter(inventory_id=inventory_id, custom_id=custom_id).exists():
                raise
            logger.info(
                "Unique constraint violation on insert",
                extra={"inventory_id": str(inventory_id), "custom_id": custom_id},
            )
            raise UniqueConstraintViolation(
                code="unique_constraint",
                message=f"Custom ID '{custom_id}' already exists in inventory",
                context={"inventory_id": str(inventory_id), "custom_id": custom_id},
            ) from exc


class SystemClock:
    """Relógio padrão: timezone.now() (aware, UTC)."""

    def now(self) -> datetime:
        return timezone.now()
