import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Inventory",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("name", models.CharField(max_length=255, verbose_name="nome")),
                (
                    "custom_id_format",
                    models.JSONField(
                        blank=True,
                        null=True,
                        verbose_name="formato de ID customizado",
                    ),
                ),
                (
                    "custom_id_format_version",
                    models.PositiveIntegerField(default=0, verbose_name="versão do formato"),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="criado em")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="atualizado em")),
            ],
            options={
                "verbose_name": "inventário",
                "verbose_name_plural": "inventários",
                "ordering": ("name", "created_at"),
            },
        ),
        migrations.CreateModel(
            name="Item",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("custom_id", models.TextField(verbose_name="ID customizado")),
                ("data", models.JSONField(blank=True, default=dict, verbose_name="dados")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="criado em")),
                (
                    "inventory",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="inventoria.inventory",
                        verbose_name="inventário",
                    ),
                ),
            ],
            options={
                "verbose_name": "item",
                "verbose_name_plural": "itens",
                "ordering": ("created_at",),
            },
        ),
        migrations.AddConstraint(
            model_name="item",
            constraint=models.UniqueConstraint(
                fields=("inventory", "custom_id"),
                name="unique_item_custom_id_per_inventory",
            ),
        ),
    ]
