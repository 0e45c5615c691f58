"""
Preview de IDs para o editor de formato.

Caminho separado e determinístico: usa valores fixos no lugar de aleatórios,
sequência e data. Não toca no cache de Generators, no RNG nem no contador de
itens, então renders repetidos do mesmo spec mostram sempre o mesmo texto.
"""

from __future__ import annotations

from datetime import datetime

from inventoria.custom_ids.formatting import format_value
from inventoria.custom_ids.types import ElementDescriptor, ElementType, FormatSpec
from inventoria.custom_ids.validation import validate_format


PREVIEW_NOW = datetime(2024, 1, 15, 10, 30, 45)
PREVIEW_SEQUENCE_COUNT = 0

PREVIEW_VALUES = {
    ElementType.RANDOM_20BIT: 524288,
    ElementType.RANDOM_32BIT: 2147483648,
    ElementType.RANDOM_6DIGIT: 123456,
    ElementType.RANDOM_9DIGIT: 123456789,
    ElementType.GUID: "12345678-1234-4123-8123-123456789012",
}


def _preview_raw(descriptor: ElementDescriptor):
    if descriptor.type is ElementType.FIXED_TEXT:
        return descriptor.value
    if descriptor.type is ElementType.DATETIME:
        return PREVIEW_NOW.strftime(descriptor.options.format.strftime)
    if descriptor.type is ElementType.SEQUENCE:
        return PREVIEW_SEQUENCE_COUNT + 1
    return PREVIEW_VALUES[descriptor.type]


def preview_custom_id(spec: FormatSpec) -> str:
    """
    Gera um ID de exemplo, não persistido, para o spec.

    Raises:
        ValidationError: Se o spec for inválido.
    """
    validate_format(spec)
    return "".join(
        format_value(_preview_raw(descriptor), descriptor.options, descriptor.type)
        for descriptor in spec.elements
    )
