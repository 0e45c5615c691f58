"""
ItemService — Criação de itens com custom ID único.
"""

from __future__ import annotations

import logging
import random
from typing import Any

from inventoria.custom_ids.matching import matches_format
from inventoria.exceptions import CollisionError, ExhaustedRetries, ValidationError
from inventoria.protocols import Clock, ItemInserter, SequenceCounter, UniquenessOracle
from inventoria.services.generate import CustomIdService


logger = logging.getLogger(__name__)


class ItemService:
    """
    Criação de itens.

    O orçamento de tentativas cobre duas fontes de colisão:
    - consulta prévia (oracle) antes do INSERT
    - violação da constraint (inventory, custom_id) no INSERT

    Nenhum candidato é persistido sem passar pela constraint.
    """

    @staticmethod
    def create_item(
        inventory,
        data: dict | None = None,
        custom_id: str | None = None,
        *,
        oracle: UniquenessOracle | None = None,
        inserter: ItemInserter | None = None,
        counter: SequenceCounter | None = None,
        clock: Clock | None = None,
        max_attempts: int | None = None,
        rng: random.Random | None = None,
    ) -> Any:
        """
        Cria um item no inventário.

        Args:
            inventory: Inventory dono do namespace
            data: Dados livres do item
            custom_id: ID informado manualmente; se None, é gerado pelo formato

        Returns:
            Item criado.

        Raises:
            ValidationError: custom_id vazio ou fora do formato, ou inventário sem formato
            CollisionError: custom_id manual já em uso
            ExhaustedRetries: Todas as tentativas de geração colidiram
        """
        from inventoria.adapters import ItemModelInserter, ItemUniquenessOracle

        oracle = oracle or ItemUniquenessOracle()
        inserter = inserter or ItemModelInserter()
        data = data or {}

        if custom_id is not None:
            return ItemService._create_with_manual_id(inventory, custom_id, data, oracle, inserter)

        spec = inventory.get_format_spec()
        if spec is None:
            raise ValidationError(
                code="missing_format",
                message="Inventory has no custom ID format; a custom_id is required",
                context={"inventory_id": str(inventory.pk)},
            )

        max_attempts = CustomIdService.resolve_max_attempts(max_attempts)
        log_context = {"inventory_id": str(inventory.pk), "max_attempts": max_attempts}
        last_candidate = None

        for attempt, candidate in CustomIdService.attempts(
            inventory.pk,
            spec,
            counter=counter,
            clock=clock,
            max_attempts=max_attempts,
            rng=rng,
        ):
            try:
                CustomIdService.check_available(oracle, inventory.pk, candidate)
                item = inserter.insert(inventory.pk, candidate, data)
            except CollisionError as exc:
                logger.info(
                    "Custom ID collision, regenerating",
                    extra={
                        **log_context,
                        "attempt": attempt,
                        "custom_id": candidate,
                        "source": exc.code,
                    },
                )
                last_candidate = candidate
                continue

            logger.info(
                "Item created",
                extra={**log_context, "attempt": attempt, "custom_id": candidate},
            )
            return item

        logger.warning("Item creation exhausted custom ID retries", extra=log_context)
        raise ExhaustedRetries(max_attempts, inventory.pk, last_candidate)

    @staticmethod
    def _create_with_manual_id(inventory, custom_id: str, data: dict, oracle, inserter) -> Any:
        # ID informado pelo usuário: não há o que regenerar
        custom_id = custom_id.strip()
        if not custom_id:
            raise ValidationError(
                code="missing_custom_id",
                message="Custom ID is required",
                context={"inventory_id": str(inventory.pk)},
            )
        spec = inventory.get_format_spec()
        if spec is not None and not matches_format(custom_id, spec):
            raise ValidationError(
                code="custom_id_format_mismatch",
                message=f"Custom ID '{custom_id}' does not match the inventory format",
                context={"inventory_id": str(inventory.pk), "custom_id": custom_id},
            )
        CustomIdService.check_available(oracle, inventory.pk, custom_id)
        return inserter.insert(inventory.pk, custom_id, data)
