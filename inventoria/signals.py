"""
Signals do Inventoria.
"""

from __future__ import annotations

from django.db import transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver

from inventoria.custom_ids import cache
from inventoria.models import Inventory
from inventoria.services.formats import FormatService


@receiver(post_delete, sender=Inventory, dispatch_uid="inventoria_drop_generator")
def drop_generator_on_inventory_delete(sender, instance: Inventory, **kwargs) -> None:
    """Tira do cache o Generator do inventário removido."""
    fingerprint = FormatService.fingerprint_of(instance.custom_id_format)
    if fingerprint:
        transaction.on_commit(lambda: cache.invalidate(fingerprint))
