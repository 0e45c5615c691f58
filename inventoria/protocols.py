"""
Inventoria Protocols — Interfaces dos colaboradores externos do motor de IDs.

Implementações Django (consulta ao banco) vivem em inventoria.adapters.
Testes podem passar qualquer objeto que satisfaça o protocol.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class UniquenessOracle(Protocol):
    """
    Consulta pontual ao namespace de itens de um inventário.

    Não garante nada sob concorrência: quem garante é a constraint do INSERT.
    """

    def exists(self, inventory_id: Any, candidate_id: str) -> bool:
        """True se `candidate_id` já está em uso no inventário."""
        ...


@runtime_checkable
class SequenceCounter(Protocol):
    """
    Fonte do valor atual de sequência (lido a cada tentativa).

    A implementação padrão conta os itens do inventário. Um contador atômico
    por inventário pode substituí-la se a sequência precisar ser estritamente
    monotônica.
    """

    def current(self, inventory_id: Any) -> int:
        """Valor atual; o elemento SEQUENCE usa current + 1."""
        ...


@runtime_checkable
class Clock(Protocol):
    """Fonte de tempo injetável para elementos DATETIME."""

    def now(self) -> datetime:
        ...


@runtime_checkable
class ItemInserter(Protocol):
    """
    INSERT de item no namespace do inventário.

    Deve levantar UniqueConstraintViolation quando (inventory_id, custom_id)
    já existe, sem deixar nada persistido.
    """

    def insert(self, inventory_id: Any, custom_id: str, data: dict) -> Any:
        ...
