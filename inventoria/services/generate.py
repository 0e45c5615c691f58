"""
CustomIdService — Orquestra a geração de IDs únicos.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Iterator

from inventoria.conf import get_inventoria_setting
from inventoria.custom_ids.cache import get_generator
from inventoria.custom_ids.types import ElementType, FormatSpec, GenerationContext
from inventoria.exceptions import CollisionError, ExhaustedRetries, ValidationError
from inventoria.protocols import Clock, SequenceCounter, UniquenessOracle


logger = logging.getLogger(__name__)


class CustomIdService:
    """
    Geração de custom IDs com retry em caso de colisão.

    Pipeline por tentativa:
    1. Snapshot novo (contagem de itens + agora)
    2. Generator (cacheado pelo hash do spec) produz o candidato
    3. Oracle confirma que o candidato está livre

    Formatos com GUID/32 bits quase nunca colidem; formatos FIXED_TEXT + SEQUENCE
    só colidem em corridas, que a constraint do INSERT resolve (ver ItemService).
    """

    @staticmethod
    def resolve_max_attempts(max_attempts: int | None = None) -> int:
        if max_attempts is None:
            max_attempts = get_inventoria_setting("MAX_GENERATION_ATTEMPTS")
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        return max_attempts

    @staticmethod
    def attempts(
        inventory_id: Any,
        spec: FormatSpec,
        *,
        counter: SequenceCounter | None = None,
        clock: Clock | None = None,
        max_attempts: int | None = None,
        rng: random.Random | None = None,
    ) -> Iterator[tuple[int, str]]:
        """
        Itera (número da tentativa, candidato) até o limite de tentativas.

        O contexto é recalculado a cada tentativa: a contagem para SEQUENCE é
        relida do banco, então um retry depois de uma corrida enxerga o item
        que o concorrente acabou de inserir.

        Raises:
            CompileError: Se o spec for inválido.
        """
        from inventoria.adapters import ItemCountSequenceCounter, SystemClock

        max_attempts = CustomIdService.resolve_max_attempts(max_attempts)
        generator = get_generator(spec)
        counter = counter or ItemCountSequenceCounter()
        clock = clock or SystemClock()
        uses_sequence = any(element.type is ElementType.SEQUENCE for element in spec.elements)

        for attempt in range(1, max_attempts + 1):
            context = GenerationContext(
                inventory_id=inventory_id,
                current_sequence_count=counter.current(inventory_id) if uses_sequence else 0,
                now=clock.now(),
            )
            yield attempt, generator(context, rng)

    @staticmethod
    def check_available(oracle: UniquenessOracle, inventory_id: Any, candidate: str) -> None:
        """
        Raises:
            CollisionError: Se o candidato já está em uso.
        """
        if oracle.exists(inventory_id, candidate):
            raise CollisionError(
                code="collision",
                message=f"Custom ID '{candidate}' already exists in inventory",
                context={"inventory_id": str(inventory_id), "custom_id": candidate},
            )

    @staticmethod
    def generate(
        inventory_id: Any,
        spec: FormatSpec,
        oracle: UniquenessOracle,
        *,
        counter: SequenceCounter | None = None,
        clock: Clock | None = None,
        max_attempts: int | None = None,
        rng: random.Random | None = None,
    ) -> str:
        """
        Gera um custom ID livre no inventário.

        Args:
            inventory_id: ID do inventário (namespace)
            spec: Formato do ID
            oracle: Consulta de unicidade
            counter: Fonte da contagem para SEQUENCE (default: count de Item)
            clock: Fonte de tempo para DATETIME (default: timezone.now)
            max_attempts: Limite de tentativas (default: MAX_GENERATION_ATTEMPTS)

        Returns:
            Candidato aceito (ainda não persistido).

        Raises:
            ExhaustedRetries: Se todas as tentativas colidiram.
        """
        max_attempts = CustomIdService.resolve_max_attempts(max_attempts)
        log_context = {"inventory_id": str(inventory_id), "max_attempts": max_attempts}
        last_candidate = None

        for attempt, candidate in CustomIdService.attempts(
            inventory_id,
            spec,
            counter=counter,
            clock=clock,
            max_attempts=max_attempts,
            rng=rng,
        ):
            try:
                CustomIdService.check_available(oracle, inventory_id, candidate)
            except CollisionError:
                logger.info(
                    "Custom ID collision, regenerating",
                    extra={**log_context, "attempt": attempt, "custom_id": candidate},
                )
                last_candidate = candidate
                continue
            return candidate

        logger.warning("Custom ID generation exhausted retries", extra=log_context)
        raise ExhaustedRetries(max_attempts, inventory_id, last_candidate)


def generate_custom_id(inventory, oracle: UniquenessOracle | None = None, **kwargs) -> str:
    """
    Gera um custom ID para um Inventory usando o formato salvo.

    Raises:
        ValidationError: Se o inventário não tem formato configurado.
        ExhaustedRetries: Se todas as tentativas colidiram.
    """
    from inventoria.adapters import ItemUniquenessOracle

    spec = inventory.get_format_spec()
    if spec is None:
        raise ValidationError(
            code="missing_format",
            message="Inventory has no custom ID format",
            context={"inventory_id": str(inventory.pk)},
        )
    return CustomIdService.generate(inventory.pk, spec, oracle or ItemUniquenessOracle(), **kwargs)
