"""
Inventoria — Identificadores customizados para itens de inventário.

Uso básico:
    from inventoria.models import Inventory, Item
    from inventoria.services import CustomIdService, FormatService, ItemService
    from inventoria.custom_ids import FormatSpec, preview_custom_id
"""

__title__ = "Inventoria"
__version__ = "0.1.0"
__author__ = "Inventoria Contributors"
