"""
Validação de FormatSpec e ElementDescriptor.

Funções puras: levantam ValidationError e não fazem IO.
"""

from __future__ import annotations

from inventoria.custom_ids.types import (
    MAX_ELEMENTS,
    MAX_FIXED_TEXT_LENGTH,
    MIN_DIGITS_RANGE,
    MIN_ELEMENTS,
    CaseTransform,
    DateTimePattern,
    ElementDescriptor,
    ElementType,
    FormatSpec,
    OptionSet,
)
from inventoria.exceptions import ValidationError


def validate_element(descriptor: ElementDescriptor, index: int | None = None) -> None:
    """
    Valida um elemento isolado.

    Raises:
        ValidationError: Se tipo, valor ou opções forem inválidos.
    """
    if not isinstance(descriptor, ElementDescriptor):
        raise ValidationError(
            code="invalid_element",
            message=f"Element at index {index} is not an ElementDescriptor",
            context={"index": index},
        )

    element_type = descriptor.type
    if not isinstance(element_type, ElementType):
        raise ValidationError(
            code="invalid_type",
            message=f"Invalid element type '{element_type}' at index {index}",
            context={"index": index, "type": str(element_type)},
        )

    options = descriptor.options
    if not isinstance(options, OptionSet):
        raise ValidationError(
            code="invalid_options",
            message=f"Options of element at index {index} must be an OptionSet",
            context={"index": index},
        )

    if element_type is ElementType.FIXED_TEXT:
        if not isinstance(descriptor.value, str):
            raise ValidationError(
                code="missing_value",
                message=f"FIXED_TEXT element at index {index} must have a value",
                context={"index": index},
            )
        if len(descriptor.value) > MAX_FIXED_TEXT_LENGTH:
            raise ValidationError(
                code="value_too_long",
                message=(
                    f"FIXED_TEXT element at index {index} exceeds "
                    f"{MAX_FIXED_TEXT_LENGTH} characters"
                ),
                context={"index": index, "length": len(descriptor.value)},
            )

    low, high = MIN_DIGITS_RANGE
    if options.min_digits is not None and not low <= options.min_digits <= high:
        raise ValidationError(
            code="invalid_min_digits",
            message=f"minDigits at index {index} must be between {low} and {high}",
            context={"index": index, "minDigits": options.min_digits},
        )
    if element_type.is_numeric and options.leading_zeros and options.min_digits is None:
        raise ValidationError(
            code="missing_min_digits",
            message=f"Element at index {index} sets leadingZeros without minDigits",
            context={"index": index},
        )

    if not isinstance(options.case, CaseTransform):
        raise ValidationError(
            code="invalid_case",
            message=f"Invalid case '{options.case}' at index {index}",
            context={"index": index},
        )

    if element_type is ElementType.DATETIME and not isinstance(options.format, DateTimePattern):
        raise ValidationError(
            code="invalid_datetime_format",
            message=f"DATETIME element at index {index} requires a known format",
            context={
                "index": index,
                "format": options.format,
                "allowed": [pattern.value for pattern in DateTimePattern],
            },
        )


def validate_format(spec: FormatSpec) -> None:
    """
    Valida o FormatSpec completo (tamanho + cada elemento).

    Raises:
        ValidationError: Na primeira regra violada.
    """
    count = len(spec.elements)
    if count < MIN_ELEMENTS:
        raise ValidationError(
            code="too_few_elements",
            message="Format must contain at least one element",
            context={"count": count},
        )
    if count > MAX_ELEMENTS:
        raise ValidationError(
            code="too_many_elements",
            message=f"Format cannot contain more than {MAX_ELEMENTS} elements",
            context={"count": count},
        )
    for index, descriptor in enumerate(spec.elements):
        validate_element(descriptor, index)


def parse_format(data) -> FormatSpec:
    """
    Decodifica e valida um formato vindo do banco ou da API.

    Aceita dict já decodificado, string JSON ou FormatSpec.
    """
    if isinstance(data, FormatSpec):
        spec = data
    elif isinstance(data, (str, bytes)):
        spec = FormatSpec.from_json(data)
    else:
        spec = FormatSpec.from_dict(data)
    validate_format(spec)
    return spec
