"""
Compilador de FormatSpec.

Transforma a lista de elementos em um Generator executável. A compilação é
determinística: FormatSpecs iguais geram Generators de comportamento idêntico
(mesma distribuição, não os mesmos valores).
"""

from __future__ import annotations

import random

from inventoria.custom_ids.formatting import format_value
from inventoria.custom_ids.generators import GENERATORS, ElementGenerator, system_rng
from inventoria.custom_ids.types import ElementDescriptor, FormatSpec, GenerationContext
from inventoria.custom_ids.validation import validate_format
from inventoria.exceptions import CompileError, ValidationError


class Generator:
    """
    Função compilada `GenerationContext -> CandidateId`.

    Uso:
        generator = compile_format(spec)
        candidate = generator(context)
    """

    def __init__(self, spec: FormatSpec, steps: list[tuple[ElementDescriptor, ElementGenerator]]):
        self.spec = spec
        self.fingerprint = spec.fingerprint
        self._steps = tuple(steps)

    def __call__(self, context: GenerationContext, rng: random.Random | None = None) -> str:
        rng = rng or system_rng
        parts = []
        for descriptor, produce in self._steps:
            raw = produce(descriptor, context, rng)
            parts.append(format_value(raw, descriptor.options, descriptor.type))
        return "".join(parts)

    def __repr__(self) -> str:
        return f"<Generator {self.fingerprint[:12]} elements={len(self._steps)}>"


def compile_format(spec: FormatSpec) -> Generator:
    """
    Compila um FormatSpec.

    Raises:
        CompileError: Se algum elemento não passa na validação.
    """
    try:
        validate_format(spec)
    except ValidationError as exc:
        raise CompileError(
            code="invalid_format",
            message=f"Cannot compile format: {exc.message}",
            context={"validation_code": exc.code, **exc.context},
        ) from exc

    steps = [(descriptor, GENERATORS[descriptor.type]) for descriptor in spec.elements]
    return Generator(spec, steps)
