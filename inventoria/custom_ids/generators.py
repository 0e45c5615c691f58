"""
Geradores por tipo de elemento.

Cada gerador recebe (descriptor, context, rng) e devolve o valor bruto,
antes da formatação. O dispatch cobre todos os ElementType: um tipo sem
gerador falha no import, nunca em runtime.
"""

from __future__ import annotations

import random
import uuid
from datetime import timezone as dt_timezone
from typing import Callable

from django.utils import timezone

from inventoria.conf import get_inventoria_setting
from inventoria.custom_ids.types import ElementDescriptor, ElementType, GenerationContext


ElementGenerator = Callable[[ElementDescriptor, GenerationContext, random.Random], object]


def _fixed_text(descriptor: ElementDescriptor, context: GenerationContext, rng: random.Random) -> str:
    return descriptor.value


def _random_bits(bits: int) -> ElementGenerator:
    def produce(descriptor, context, rng) -> int:
        return rng.getrandbits(bits)

    return produce


def _random_below(upper: int) -> ElementGenerator:
    def produce(descriptor, context, rng) -> int:
        return rng.randrange(upper)

    return produce


def _guid(descriptor: ElementDescriptor, context: GenerationContext, rng: random.Random) -> str:
    # uuid4 usa os.urandom; version/variant bits conforme RFC 4122
    return str(uuid.uuid4())


def _datetime(descriptor: ElementDescriptor, context: GenerationContext, rng: random.Random) -> str:
    now = context.now
    if timezone.is_aware(now):
        if get_inventoria_setting("DATETIME_USE_LOCALTIME"):
            now = timezone.localtime(now)
        else:
            now = now.astimezone(dt_timezone.utc)
    return now.strftime(descriptor.options.format.strftime)


def _sequence(descriptor: ElementDescriptor, context: GenerationContext, rng: random.Random) -> int:
    return context.current_sequence_count + 1


GENERATORS: dict[ElementType, ElementGenerator] = {
    ElementType.FIXED_TEXT: _fixed_text,
    ElementType.RANDOM_20BIT: _random_bits(20),
    ElementType.RANDOM_32BIT: _random_bits(32),
    ElementType.RANDOM_6DIGIT: _random_below(10**6),
    ElementType.RANDOM_9DIGIT: _random_below(10**9),
    ElementType.GUID: _guid,
    ElementType.DATETIME: _datetime,
    ElementType.SEQUENCE: _sequence,
}

_missing = set(ElementType) - set(GENERATORS)
if _missing:
    raise ImportError(f"No generator for element types: {sorted(t.value for t in _missing)}")


system_rng = random.SystemRandom()


def produce(
    descriptor: ElementDescriptor,
    context: GenerationContext,
    rng: random.Random | None = None,
):
    """Produz o valor bruto de um elemento."""
    return GENERATORS[descriptor.type](descriptor, context, rng or system_rng)
