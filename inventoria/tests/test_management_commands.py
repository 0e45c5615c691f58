"""
Tests para o comando check_custom_ids.
"""

from __future__ import annotations

import uuid
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from inventoria.models import Inventory, Item


EQUIPMENT = {
    "elements": [
        {"type": "FIXED_TEXT", "value": "EQ-"},
        {"type": "SEQUENCE", "options": {"leadingZeros": True, "minDigits": 3}},
    ]
}


class CheckCustomIdsCommandTests(TestCase):
    """Testes para o comando check_custom_ids."""

    def _call(self, *args) -> str:
        out = StringIO()
        call_command("check_custom_ids", *args, stdout=out)
        return out.getvalue()

    def test_all_ok(self):
        """Itens dentro do formato geram resumo limpo."""
        inventory = Inventory.objects.create(name="Equipamentos", custom_id_format=EQUIPMENT)
        Item.objects.create(inventory=inventory, custom_id="EQ-001")

        output = self._call()

        assert "Equipamentos: OK (v0)" in output
        assert "Formatos inválidos: 0, itens fora do formato: 0" in output

    def test_reports_mismatched_items(self):
        """Lista itens fora do formato respeitando --limit."""
        inventory = Inventory.objects.create(name="Equipamentos", custom_id_format=EQUIPMENT)
        Item.objects.create(inventory=inventory, custom_id="EQ-001")
        Item.objects.create(inventory=inventory, custom_id="LEGACY-1")
        Item.objects.create(inventory=inventory, custom_id="LEGACY-2")

        output = self._call("--limit", "1")

        assert "Equipamentos: 2 itens fora do formato v0" in output
        assert output.count("  - LEGACY-") == 1
        assert "itens fora do formato: 2" in output

    def test_reports_invalid_and_missing_formats(self):
        """Reporta formato inválido e inventário sem formato."""
        Inventory.objects.create(name="Quebrado", custom_id_format={"elements": [{"type": "NOPE"}]})
        Inventory.objects.create(name="Vazio")

        output = self._call()

        assert "Quebrado: formato inválido (invalid_type" in output
        assert "Vazio: sem formato" in output
        assert "Formatos inválidos: 1" in output

    def test_reports_non_object_format(self):
        """Formato salvo como lista ou texto é reportado como inválido."""
        Inventory.objects.create(name="Lista", custom_id_format=["x"])
        Inventory.objects.create(name="Texto", custom_id_format="EQ-###")

        output = self._call()

        assert "Lista: formato inválido (missing_elements" in output
        assert "Texto: formato inválido (invalid_json" in output
        assert "Formatos inválidos: 2" in output

    def test_empty_elements_is_invalid_format(self):
        """Lista de elementos vazia é formato inválido, não ausência de formato."""
        Inventory.objects.create(name="Vazio", custom_id_format={"elements": []})

        output = self._call()

        assert "Vazio: formato inválido (too_few_elements" in output
        assert "sem formato" not in output
        assert "Formatos inválidos: 1" in output

    def test_single_inventory(self):
        """--inventory restringe a um inventário."""
        target = Inventory.objects.create(name="Alvo", custom_id_format=EQUIPMENT)
        Inventory.objects.create(name="Outro", custom_id_format=EQUIPMENT)

        output = self._call("--inventory", str(target.pk))

        assert "Alvo" in output
        assert "Outro" not in output

    def test_unknown_inventory(self):
        """Inventário inexistente levanta CommandError."""
        with pytest.raises(CommandError):
            self._call("--inventory", str(uuid.uuid4()))

    def test_malformed_inventory_id(self):
        """ID que não é UUID levanta CommandError."""
        with pytest.raises(CommandError):
            self._call("--inventory", "not-a-uuid")
