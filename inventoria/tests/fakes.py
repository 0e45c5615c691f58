"""
Colaboradores em memória para testes do motor de IDs.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone

from inventoria.exceptions import UniqueConstraintViolation


class FixedClock:
    def __init__(self, now: datetime | None = None):
        self._now = now or datetime(2024, 1, 15, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now


class StaticOracle:
    """Oracle com resposta fixa que conta as consultas."""

    def __init__(self, answer: bool = False):
        self.answer = answer
        self.calls: list[tuple] = []

    def exists(self, inventory_id, candidate_id: str) -> bool:
        self.calls.append((inventory_id, candidate_id))
        return self.answer


class ScriptedOracle:
    """Responde em sequência; depois do roteiro, sempre False."""

    def __init__(self, answers: list[bool]):
        self.answers = list(answers)
        self.calls: list[str] = []

    def exists(self, inventory_id, candidate_id: str) -> bool:
        self.calls.append(candidate_id)
        return self.answers.pop(0) if self.answers else False


class CountingCounter:
    def __init__(self, value: int = 0):
        self.value = value
        self.calls = 0

    def current(self, inventory_id) -> int:
        self.calls += 1
        return self.value


class RejectingInserter:
    """Todo INSERT viola a constraint."""

    def __init__(self):
        self.calls = 0

    def insert(self, inventory_id, custom_id: str, data: dict):
        self.calls += 1
        raise UniqueConstraintViolation(
            code="unique_constraint",
            message=f"Custom ID '{custom_id}' already exists in inventory",
            context={"custom_id": custom_id},
        )


class InMemoryItemStore:
    """
    Namespace de itens com INSERT atômico e unicidade (inventory_id, custom_id).

    Faz papel de oracle, contador de sequência e inserter ao mesmo tempo.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.items: dict[tuple, dict] = {}
        self.insert_calls = 0
        self.violations = 0

    def exists(self, inventory_id, candidate_id: str) -> bool:
        with self._lock:
            return (inventory_id, candidate_id) in self.items

    def current(self, inventory_id) -> int:
        with self._lock:
            return sum(1 for key in self.items if key[0] == inventory_id)

    def insert(self, inventory_id, custom_id: str, data: dict):
        with self._lock:
            self.insert_calls += 1
            key = (inventory_id, custom_id)
            if key in self.items:
                self.violations += 1
                raise UniqueConstraintViolation(
                    code="unique_constraint",
                    message=f"Custom ID '{custom_id}' already exists in inventory",
                    context={"custom_id": custom_id},
                )
            self.items[key] = data
            return custom_id


class RacingItemStore(InMemoryItemStore):
    """
    Força a corrida check-then-insert entre N threads.

    A primeira leitura de contagem e a primeira consulta de unicidade de cada
    thread esperam as demais, então todas enxergam o mesmo estado antes de
    qualquer INSERT.
    """

    def __init__(self, parties: int):
        super().__init__()
        self._count_barrier = threading.Barrier(parties, timeout=5)
        self._oracle_barrier = threading.Barrier(parties, timeout=5)
        self._local = threading.local()

    def current(self, inventory_id) -> int:
        value = super().current(inventory_id)
        if not getattr(self._local, "counted", False):
            self._local.counted = True
            self._count_barrier.wait()
        return value

    def exists(self, inventory_id, candidate_id: str) -> bool:
        result = super().exists(inventory_id, candidate_id)
        if not getattr(self._local, "checked", False):
            self._local.checked = True
            self._oracle_barrier.wait()
        return result
