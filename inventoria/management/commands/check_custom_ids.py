"""
Management command para auditar formatos e custom IDs existentes.

Uso:
    python manage.py check_custom_ids
    python manage.py check_custom_ids --inventory <uuid>
    python manage.py check_custom_ids --limit 20

Reporta:
- inventários com custom_id_format inválido
- itens cujo custom_id não bate com o formato atual do inventário
  (esperado após troca de formato; não é corrigido automaticamente)
"""

import uuid

from django.core.management.base import BaseCommand, CommandError

from inventoria.custom_ids.matching import build_pattern
from inventoria.exceptions import ValidationError
from inventoria.models import Inventory, Item


class Command(BaseCommand):
    help = "Confere formatos de ID customizado e itens que não batem com eles"

    def add_arguments(self, parser):
        parser.add_argument(
            "--inventory",
            type=str,
            default=None,
            help="Confere apenas o inventário com este ID",
        )
        parser.add_argument(
            "--limit",
            type=int,
            default=10,
            help="Máximo de itens divergentes listados por inventário (default: 10)",
        )

    def handle(self, *args, **options):
        inventory_id = options["inventory"]
        limit = options["limit"]

        inventories = Inventory.objects.all()
        if inventory_id:
            try:
                inventory_id = uuid.UUID(inventory_id)
            except ValueError:
                raise CommandError(f"ID de inventário inválido: {inventory_id}")
            inventories = inventories.filter(pk=inventory_id)
            if not inventories.exists():
                raise CommandError(f"Inventário não encontrado: {inventory_id}")

        invalid_formats = 0
        mismatched_items = 0

        for inventory in inventories.order_by("name"):
            if not inventory.has_custom_id_format:
                self.stdout.write(f"{inventory.name}: sem formato")
                continue

            try:
                pattern = build_pattern(inventory.get_format_spec())
            except ValidationError as e:
                invalid_formats += 1
                self.stdout.write(
                    self.style.ERROR(f"{inventory.name}: formato inválido ({e.code}: {e.message})")
                )
                continue

            mismatched = [
                custom_id
                for custom_id in Item.objects.filter(inventory=inventory)
                .order_by("created_at")
                .values_list("custom_id", flat=True)
                .iterator()
                if pattern.fullmatch(custom_id) is None
            ]
            mismatched_items += len(mismatched)

            if not mismatched:
                self.stdout.write(f"{inventory.name}: OK (v{inventory.custom_id_format_version})")
                continue

            self.stdout.write(
                self.style.WARNING(
                    f"{inventory.name}: {len(mismatched)} itens fora do formato "
                    f"v{inventory.custom_id_format_version}"
                )
            )
            for custom_id in mismatched[:limit]:
                self.stdout.write(f"  - {custom_id}")

        summary = f"Formatos inválidos: {invalid_formats}, itens fora do formato: {mismatched_items}"
        if invalid_formats or mismatched_items:
            self.stdout.write(self.style.WARNING(summary))
        else:
            self.stdout.write(self.style.SUCCESS(summary))
