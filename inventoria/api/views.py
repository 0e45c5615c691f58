"""
Inventoria API Views — Endpoints do motor de IDs customizados.

Endpoints:
    GET  /api/inventories                              - Lista inventários
    GET  /api/inventories/{id}                         - Detalhes
    GET  /api/inventories/{id}/custom-id-format        - Formato atual + versão
    PUT  /api/inventories/{id}/custom-id-format        - Salva novo formato
    POST /api/inventories/{id}/items                   - Cria item com ID gerado
    POST /api/custom-id-format/preview                 - Preview determinístico
    POST /api/custom-id-format/match                   - Confere ID contra formato

Permissões configuráveis via settings.INVENTORIA:
    DEFAULT_PERMISSION_CLASSES, FORMAT_EDIT_PERMISSION_CLASSES
"""

from __future__ import annotations

import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response

from inventoria.conf import get_inventoria_setting
from inventoria.custom_ids.matching import matches_format
from inventoria.custom_ids.preview import preview_custom_id
from inventoria.exceptions import CollisionError, ExhaustedRetries, ValidationError
from inventoria.models import Inventory
from inventoria.services import FormatService, ItemService

from .serializers import (
    CustomIdFormatSerializer,
    CustomIdMatchSerializer,
    InventorySerializer,
    ItemCreateSerializer,
    ItemSerializer,
)


logger = logging.getLogger(__name__)


def _get_actor(request) -> str:
    """Extrai username do request ou retorna 'api' como fallback."""
    user = getattr(request, "user", None)
    return getattr(user, "username", None) or "api"


class InventoryViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Inventários (read-only) e as operações do formato de ID.

    CRUD de inventários fica fora desta API; aqui só o que o motor de IDs precisa.
    """

    queryset = Inventory.objects.all()
    serializer_class = InventorySerializer

    def get_permissions(self):
        if self.action == "custom_id_format" and self.request.method == "PUT":
            classes = get_inventoria_setting("FORMAT_EDIT_PERMISSION_CLASSES")
        else:
            classes = get_inventoria_setting("DEFAULT_PERMISSION_CLASSES")
        return [permission() for permission in classes]

    @action(detail=True, methods=["get", "put"], url_path="custom-id-format")
    def custom_id_format(self, request, *args, **kwargs):
        inventory: Inventory = self.get_object()

        if request.method == "PUT":
            s = CustomIdFormatSerializer(data=request.data)
            s.is_valid(raise_exception=True)
            inventory = FormatService.save_format(inventory.pk, s.validated_data["format"])
            logger.info(
                "Custom ID format updated via API",
                extra={
                    "inventory_id": str(inventory.pk),
                    "version": inventory.custom_id_format_version,
                    "actor": _get_actor(request),
                },
            )

        return Response(
            {
                "format": inventory.custom_id_format,
                "version": inventory.custom_id_format_version,
            },
            status=status.HTTP_200_OK,
        )

    @action(detail=True, methods=["post"], url_path="items")
    def create_item(self, request, *args, **kwargs):
        """
        Cria um item no inventário.

        Returns:
            201: Item criado
            400: Inventário sem formato / custom_id vazio ou fora do formato
            409: custom_id manual em uso, ou tentativas esgotadas (retryable)
        """
        inventory: Inventory = self.get_object()
        s = ItemCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            item = ItemService.create_item(
                inventory,
                data=s.validated_data.get("data"),
                custom_id=s.validated_data.get("custom_id"),
            )
        except ValidationError as e:
            raise DRFValidationError({"code": e.code, "message": e.message, "context": e.context})
        except ExhaustedRetries as e:
            logger.warning(
                "Item creation failed: custom ID retries exhausted",
                extra={"inventory_id": str(inventory.pk), "actor": _get_actor(request)},
            )
            return Response(e.as_dict(), status=status.HTTP_409_CONFLICT)
        except CollisionError as e:
            return Response(e.as_dict(), status=status.HTTP_409_CONFLICT)

        return Response(ItemSerializer(item).data, status=status.HTTP_201_CREATED)


class CustomIdFormatViewSet(viewsets.ViewSet):
    """
    Operações sem estado sobre um formato enviado no corpo.

    Nada aqui lê ou grava itens: o preview usa valores fixos.
    """

    def get_permissions(self):
        return [permission() for permission in get_inventoria_setting("DEFAULT_PERMISSION_CLASSES")]

    @action(detail=False, methods=["post"], url_path="preview")
    def preview(self, request):
        s = CustomIdFormatSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        return Response({"preview": preview_custom_id(s.validated_data["format"])})

    @action(detail=False, methods=["post"], url_path="match")
    def match(self, request):
        s = CustomIdMatchSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        matches = matches_format(s.validated_data["custom_id"], s.validated_data["format"])
        return Response({"matches": matches})
