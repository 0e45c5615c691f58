"""
Inventoria Models.

Re-exports para imports curtos:
    from inventoria.models import Inventory, Item
"""

from .inventory import Inventory  # noqa: F401
from .item import Item  # noqa: F401
