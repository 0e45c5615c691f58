"""
Inventoria Services.

Re-exports:
    from inventoria.services import CustomIdService, FormatService, ItemService
"""

from .formats import FormatService  # noqa: F401
from .generate import CustomIdService, generate_custom_id  # noqa: F401
from .items import ItemService  # noqa: F401
