"""
Tests para inventoria.custom_ids.compiler.
"""

from __future__ import annotations

import random
import re
import uuid
from datetime import datetime, timezone

import pytest
from django.test import SimpleTestCase

from inventoria.custom_ids.compiler import Generator, compile_format
from inventoria.custom_ids.types import (
    CaseTransform,
    DateTimePattern,
    ElementDescriptor,
    ElementType,
    FormatSpec,
    GenerationContext,
    OptionSet,
)
from inventoria.exceptions import CompileError, ValidationError


def _context(count=0):
    return GenerationContext(
        inventory_id=uuid.uuid4(),
        current_sequence_count=count,
        now=datetime(2024, 1, 15, tzinfo=timezone.utc),
    )


ITEM_FORMAT = FormatSpec.from_dict({
    "elements": [
        {"type": "FIXED_TEXT", "value": "ITEM-"},
        {"type": "RANDOM_6DIGIT", "options": {"leadingZeros": True, "minDigits": 6}},
    ]
})


class CompileFormatTests(SimpleTestCase):
    """Testes para compile_format e Generator."""

    def test_compile_returns_generator(self):
        """Generator expõe spec e fingerprint."""
        generator = compile_format(ITEM_FORMAT)
        assert isinstance(generator, Generator)
        assert generator.spec == ITEM_FORMAT
        assert generator.fingerprint == ITEM_FORMAT.fingerprint

    def test_compiles_every_valid_size(self):
        """Formatos de 1 a 10 elementos compilam."""
        element = ElementDescriptor(ElementType.SEQUENCE)
        for count in range(1, 11):
            generator = compile_format(FormatSpec([element] * count))
            assert generator(_context(count=0)) == "1" * count

    def test_invalid_spec_raises_compile_error(self):
        """Spec inválido vira CompileError encadeado ao ValidationError."""
        spec = FormatSpec([ElementDescriptor(ElementType.FIXED_TEXT)])
        with pytest.raises(CompileError) as exc:
            compile_format(spec)
        assert exc.value.context["validation_code"] == "missing_value"
        assert isinstance(exc.value.__cause__, ValidationError)

    def test_concatenates_in_descriptor_order(self):
        """Partes são concatenadas na ordem dos elementos."""
        spec = FormatSpec([
            ElementDescriptor(ElementType.FIXED_TEXT, "EQ-"),
            ElementDescriptor(ElementType.DATETIME, options=OptionSet(format=DateTimePattern.YYYYMMDD)),
            ElementDescriptor(ElementType.FIXED_TEXT, "-"),
            ElementDescriptor(ElementType.SEQUENCE, options=OptionSet(leading_zeros=True, min_digits=3)),
        ])
        assert compile_format(spec)(_context(count=41)) == "EQ-20240115-042"

    def test_item_format_matches_pattern(self):
        """ITEM- seguido de 6 dígitos, sempre."""
        generator = compile_format(ITEM_FORMAT)
        pattern = re.compile(r"ITEM-\d{6}")
        rng = random.Random(99)
        for _ in range(1000):
            assert pattern.fullmatch(generator(_context(), rng))

    def test_fixed_text_case_in_output(self):
        """Caixa é aplicada por elemento."""
        spec = FormatSpec([
            ElementDescriptor(ElementType.FIXED_TEXT, "Eq-", OptionSet(case=CaseTransform.UPPER)),
            ElementDescriptor(ElementType.FIXED_TEXT, "Box", OptionSet(case=CaseTransform.LOWER)),
            ElementDescriptor(ElementType.FIXED_TEXT, "Mix"),
        ])
        assert compile_format(spec)(_context()) == "EQ-boxMix"

    def test_guid_upper_case(self):
        """GUID com case upper continua um UUID v4."""
        spec = FormatSpec([ElementDescriptor(ElementType.GUID, options=OptionSet(case=CaseTransform.UPPER))])
        value = compile_format(spec)(_context())
        assert value == value.upper()
        assert uuid.UUID(value).version == 4

    def test_compilation_is_deterministic(self):
        """Specs iguais produzem a mesma distribuição: mesmo RNG, mesmo resultado."""
        spec_a = FormatSpec.from_json(ITEM_FORMAT.to_json())
        a = compile_format(ITEM_FORMAT)
        b = compile_format(spec_a)
        assert a.fingerprint == b.fingerprint
        assert a(_context(), random.Random(5)) == b(_context(), random.Random(5))
