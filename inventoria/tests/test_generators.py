"""
Tests para inventoria.custom_ids.generators.
"""

from __future__ import annotations

import random
import uuid
from datetime import datetime, timedelta, timezone

from django.test import SimpleTestCase, override_settings

from inventoria.custom_ids.generators import GENERATORS, produce
from inventoria.custom_ids.types import (
    DateTimePattern,
    ElementDescriptor,
    ElementType,
    GenerationContext,
    OptionSet,
)


def _context(count=0, now=None):
    return GenerationContext(
        inventory_id=uuid.uuid4(),
        current_sequence_count=count,
        now=now or datetime(2024, 1, 15, tzinfo=timezone.utc),
    )


def _datetime(pattern: DateTimePattern) -> ElementDescriptor:
    return ElementDescriptor(ElementType.DATETIME, options=OptionSet(format=pattern))


class GeneratorDispatchTests(SimpleTestCase):
    """Testes para o dispatch de geradores."""

    def test_every_element_type_has_a_generator(self):
        """Todo ElementType tem gerador."""
        assert set(GENERATORS) == set(ElementType)


class FixedTextTests(SimpleTestCase):
    """Testes para FIXED_TEXT."""

    def test_returns_value_verbatim(self):
        """FIXED_TEXT devolve o valor sem alteração."""
        descriptor = ElementDescriptor(ElementType.FIXED_TEXT, "Eq- 01")
        assert produce(descriptor, _context()) == "Eq- 01"


class RandomGeneratorTests(SimpleTestCase):
    """Testes para os tipos aleatórios."""

    RANGES = {
        ElementType.RANDOM_20BIT: 2**20,
        ElementType.RANDOM_32BIT: 2**32,
        ElementType.RANDOM_6DIGIT: 10**6,
        ElementType.RANDOM_9DIGIT: 10**9,
    }

    def test_values_within_range(self):
        """Valores aleatórios ficam dentro da faixa do tipo."""
        rng = random.Random(1234)
        context = _context()
        for element_type, upper in self.RANGES.items():
            descriptor = ElementDescriptor(element_type)
            for _ in range(500):
                value = produce(descriptor, context, rng)
                assert isinstance(value, int)
                assert 0 <= value < upper

    def test_random_6digit_spreads_over_range(self):
        """Valores pequenos (menos de 6 dígitos) também aparecem antes do padding."""
        rng = random.Random(42)
        descriptor = ElementDescriptor(ElementType.RANDOM_6DIGIT)
        values = [produce(descriptor, _context(), rng) for _ in range(5000)]

        assert min(values) < 100_000
        assert max(values) >= 900_000
        assert len(set(values)) > 4900

    def test_seeded_rng_is_reproducible(self):
        """RNG com seed reproduz a sequência."""
        descriptor = ElementDescriptor(ElementType.RANDOM_32BIT)
        a = [produce(descriptor, _context(), random.Random(7)) for _ in range(3)]
        b = [produce(descriptor, _context(), random.Random(7)) for _ in range(3)]
        assert a == b

    def test_default_rng_is_system_random(self):
        """Sem rng, usa SystemRandom."""
        descriptor = ElementDescriptor(ElementType.RANDOM_20BIT)
        assert 0 <= produce(descriptor, _context()) < 2**20


class GuidTests(SimpleTestCase):
    """Testes para GUID."""

    def test_uuid_v4_with_rfc4122_variant(self):
        """GUID é UUID v4 com variante RFC 4122."""
        descriptor = ElementDescriptor(ElementType.GUID)
        for _ in range(50):
            value = produce(descriptor, _context())
            parsed = uuid.UUID(value)
            assert parsed.version == 4
            assert parsed.variant == uuid.RFC_4122
            assert value == str(parsed)


class DateTimeTests(SimpleTestCase):
    """Testes para DATETIME."""

    def test_yyyymmdd_at_fixed_time(self):
        """YYYYMMDD formata a data do contexto."""
        now = datetime(2024, 1, 15, 0, 0, 0, tzinfo=timezone.utc)
        assert produce(_datetime(DateTimePattern.YYYYMMDD), _context(now=now)) == "20240115"

    def test_all_patterns(self):
        """Todos os padrões de data/hora."""
        now = datetime(2024, 1, 15, 10, 30, 45, tzinfo=timezone.utc)
        expected = {
            DateTimePattern.YYYY: "2024",
            DateTimePattern.MM: "01",
            DateTimePattern.DD: "15",
            DateTimePattern.HH: "10",
            DateTimePattern.mm: "30",
            DateTimePattern.ss: "45",
            DateTimePattern.YYYYMMDD: "20240115",
            DateTimePattern.HHMMSS: "103045",
            DateTimePattern.YYYYMMDDHHMMSS: "20240115103045",
        }
        for pattern, value in expected.items():
            output = produce(_datetime(pattern), _context(now=now))
            assert output == value
            assert len(output) == pattern.width

    def test_aware_datetime_is_rendered_in_utc(self):
        """Datetime aware é convertido para UTC."""
        now = datetime(2024, 1, 15, 1, 0, tzinfo=timezone(timedelta(hours=3)))
        assert produce(_datetime(DateTimePattern.YYYYMMDD), _context(now=now)) == "20240114"

    @override_settings(INVENTORIA={"DATETIME_USE_LOCALTIME": True}, TIME_ZONE="America/Sao_Paulo")
    def test_localtime_setting(self):
        """DATETIME_USE_LOCALTIME usa o TIME_ZONE do projeto."""
        now = datetime(2024, 1, 15, 1, 0, tzinfo=timezone.utc)
        assert produce(_datetime(DateTimePattern.YYYYMMDD), _context(now=now)) == "20240114"

    def test_naive_datetime_used_as_is(self):
        """Datetime naive é usado como veio."""
        now = datetime(2024, 1, 15, 23, 59, 59)
        assert produce(_datetime(DateTimePattern.HHMMSS), _context(now=now)) == "235959"


class SequenceTests(SimpleTestCase):
    """Testes para SEQUENCE."""

    def test_count_plus_one(self):
        """SEQUENCE é contagem + 1."""
        descriptor = ElementDescriptor(ElementType.SEQUENCE)
        assert str(produce(descriptor, _context(count=41))) == "42"

    def test_empty_inventory_starts_at_one(self):
        """Inventário vazio começa em 1."""
        descriptor = ElementDescriptor(ElementType.SEQUENCE)
        assert produce(descriptor, _context(count=0)) == 1
