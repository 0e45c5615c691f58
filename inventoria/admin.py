from __future__ import annotations

import json
import logging

from django import forms
from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _
from unfold.admin import ModelAdmin, TabularInline
from unfold.decorators import display

from .custom_ids.preview import preview_custom_id
from .custom_ids.validation import parse_format
from .exceptions import ValidationError
from .models import Inventory, Item
from .services import FormatService


logger = logging.getLogger(__name__)


class InventoryAdminForm(forms.ModelForm):
    """Valida custom_id_format com as mesmas regras do motor de geração."""

    class Meta:
        model = Inventory
        fields = ("name", "custom_id_format")

    def clean_custom_id_format(self):
        value = self.cleaned_data.get("custom_id_format")
        if not value:
            return None
        try:
            return parse_format(value).to_dict()
        except ValidationError as e:
            raise forms.ValidationError(e.message, code=e.code)


class ItemInline(TabularInline):
    model = Item
    fields = ("custom_id", "created_at")
    readonly_fields = ("custom_id", "created_at")
    extra = 0
    can_delete = False
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Inventory)
class InventoryAdmin(ModelAdmin):
    form = InventoryAdminForm
    list_display = ("name", "format_preview", "custom_id_format_version", "items_count", "created_at")
    search_fields = ("name",)
    list_fullwidth = True
    compressed_fields = True
    warn_unsaved_form = True
    inlines = [ItemInline]

    fieldsets = (
        (_("Identidade"), {"fields": ("name",), "classes": ("tab",)}),
        (
            _("ID customizado"),
            {
                "fields": ("custom_id_format", "format_display", "format_preview", "custom_id_format_version"),
                "classes": ("tab",),
            },
        ),
        (_("Auditoria"), {"fields": ("created_at", "updated_at"), "classes": ("tab",)}),
    )
    readonly_fields = ("format_display", "format_preview", "custom_id_format_version", "created_at", "updated_at")

    def save_model(self, request, obj: Inventory, form, change):
        """Formato passa pelo FormatService (versão + invalidação do cache)."""
        new_format = form.cleaned_data.get("custom_id_format")
        if not change:
            obj.custom_id_format = None
            super().save_model(request, obj, form, change)
        elif "name" in form.changed_data:
            obj.save(update_fields=["name", "updated_at"])

        if "custom_id_format" in form.changed_data or (not change and new_format):
            if new_format:
                saved = FormatService.save_format(obj.pk, new_format)
            else:
                saved = FormatService.clear_format(obj.pk)
            obj.custom_id_format = saved.custom_id_format
            obj.custom_id_format_version = saved.custom_id_format_version
            logger.info(
                "Custom ID format saved via admin",
                extra={"inventory_id": str(obj.pk), "actor": request.user.get_username()},
            )

    @display(description=_("formato"))
    def format_display(self, obj: Inventory) -> str:
        if not obj or not obj.custom_id_format:
            return "-"
        formatted = json.dumps(obj.custom_id_format, indent=2, ensure_ascii=False)
        return format_html('<pre class="font-mono overflow-x-auto p-3 rounded-default text-sm">{}</pre>', formatted)

    @display(description=_("exemplo"))
    def format_preview(self, obj: Inventory) -> str:
        if not obj or not obj.has_custom_id_format:
            return "-"
        try:
            return preview_custom_id(obj.get_format_spec())
        except ValidationError as e:
            return format_html('<span class="text-red-600">{}</span>', e.message)

    @display(description=_("itens"))
    def items_count(self, obj: Inventory) -> int:
        return obj.items.count()


@admin.register(Item)
class ItemAdmin(ModelAdmin):
    list_display = ("custom_id", "inventory", "created_at")
    list_filter = ("inventory",)
    search_fields = ("custom_id",)
    list_select_related = ("inventory",)
    readonly_fields = ("inventory", "custom_id", "created_at")
    fields = ("inventory", "custom_id", "data", "created_at")
    list_fullwidth = True

    def has_add_permission(self, request):
        # Itens nascem pelo ItemService (geração + constraint)
        return False
