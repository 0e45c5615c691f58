"""
Pós-processamento de valores de elementos.
"""

from __future__ import annotations

from inventoria.custom_ids.types import CaseTransform, ElementType, OptionSet


def format_value(raw, options: OptionSet, element_type: ElementType) -> str:
    """
    Converte o valor bruto de um elemento em texto final.

    Ordem:
    1. str() se numérico
    2. zeros à esquerda até min_digits (só se leading_zeros e o valor é só dígitos)
    3. caixa alta/baixa (só FIXED_TEXT e GUID)

    Nunca trunca: valor maior que min_digits sai na largura completa.
    """
    text = str(raw)

    if options.leading_zeros and options.min_digits and text.isascii() and text.isdigit():
        text = text.zfill(options.min_digits)

    if element_type.supports_case:
        if options.case is CaseTransform.UPPER:
            text = text.upper()
        elif options.case is CaseTransform.LOWER:
            text = text.lower()

    return text
