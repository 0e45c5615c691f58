from __future__ import annotations

from rest_framework import serializers

from inventoria.custom_ids.types import MAX_ELEMENTS, MIN_ELEMENTS
from inventoria.custom_ids.validation import parse_format
from inventoria.exceptions import ValidationError
from inventoria.models import Inventory, Item


class InventorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Inventory
        fields = ("id", "name", "custom_id_format", "custom_id_format_version", "created_at")


class ItemSerializer(serializers.ModelSerializer):
    inventory_id = serializers.UUIDField(source="inventory.id", read_only=True)

    class Meta:
        model = Item
        fields = ("id", "inventory_id", "custom_id", "data", "created_at")


class FormatSpecField(serializers.JSONField):
    """
    Campo `{"elements": [...]}` que já devolve o FormatSpec validado.

    Erros de validação viram 400 com code/message/context.
    """

    def to_internal_value(self, data):
        data = super().to_internal_value(data)
        try:
            return parse_format(data)
        except ValidationError as e:
            raise serializers.ValidationError({"code": e.code, "message": e.message, "context": e.context})


class CustomIdFormatSerializer(serializers.Serializer):
    """
    PUT /api/inventories/{id}/custom-id-format

    Aceita `{"format": {"elements": [...]}}` com 1..10 elementos.
    """

    format = FormatSpecField(help_text=f"{{'elements': [...]}} com {MIN_ELEMENTS}..{MAX_ELEMENTS} elementos")


class CustomIdMatchSerializer(serializers.Serializer):
    format = FormatSpecField()
    custom_id = serializers.CharField(allow_blank=False, trim_whitespace=False)


class ItemCreateSerializer(serializers.Serializer):
    """
    POST /api/inventories/{id}/items

    Notas:
    - Sem `custom_id`, o ID é gerado pelo formato do inventário.
    - Com `custom_id`, o valor é usado como veio (após strip) e não é regenerado.
    """

    custom_id = serializers.CharField(required=False, allow_blank=False)
    data = serializers.DictField(required=False)
