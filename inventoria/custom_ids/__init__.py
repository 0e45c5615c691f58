"""
Inventoria custom_ids — Formato composto de identificadores de item.

Cada inventário define um FormatSpec (lista ordenada de elementos: texto fixo,
números aleatórios, GUID, data/hora, sequência). O spec é compilado uma vez em
um Generator, cacheado pelo hash de conteúdo.

Uso:
    from inventoria.custom_ids import FormatSpec, compile_format, preview_custom_id

    spec = FormatSpec.from_json('{"elements": [{"type": "FIXED_TEXT", "value": "EQ-"}, {"type": "SEQUENCE"}]}')
    preview_custom_id(spec)  # "EQ-1"

Sem IO: a consulta de unicidade e o INSERT ficam em inventoria.services.
"""

from .cache import get_generator, invalidate  # noqa: F401
from .compiler import Generator, compile_format  # noqa: F401
from .formatting import format_value  # noqa: F401
from .generators import produce  # noqa: F401
from .matching import build_pattern, matches_format  # noqa: F401
from .preview import preview_custom_id  # noqa: F401
from .types import (  # noqa: F401
    CaseTransform,
    DateTimePattern,
    ElementDescriptor,
    ElementType,
    FormatSpec,
    GenerationContext,
    OptionSet,
    default_options,
)
from .validation import parse_format, validate_element, validate_format  # noqa: F401
