"""
Cache de Generators compilados.

Estado explícito do processo, endereçado pelo hash de conteúdo do FormatSpec.
A invalidação acontece quando o dono do inventário salva um novo formato
(ver FormatService.save_format), depois do commit.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from inventoria.conf import get_inventoria_setting
from inventoria.custom_ids.compiler import Generator, compile_format
from inventoria.custom_ids.types import FormatSpec


logger = logging.getLogger(__name__)


class _GeneratorCache:
    """LRU thread-safe de Generators por fingerprint."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._generators: OrderedDict[str, Generator] = OrderedDict()

    def get(self, spec: FormatSpec) -> Generator:
        """
        Retorna o Generator do spec, compilando na primeira vez.

        Raises:
            CompileError: Se o spec for inválido (nada é cacheado).
        """
        fingerprint = spec.fingerprint
        with self._lock:
            generator = self._generators.get(fingerprint)
            if generator is not None:
                self._generators.move_to_end(fingerprint)
                return generator

        generator = compile_format(spec)

        with self._lock:
            # Outra thread pode ter compilado o mesmo spec; mantém o primeiro
            generator = self._generators.setdefault(fingerprint, generator)
            self._generators.move_to_end(fingerprint)
            max_size = get_inventoria_setting("GENERATOR_CACHE_SIZE")
            while max_size and len(self._generators) > max_size:
                evicted, _ = self._generators.popitem(last=False)
                logger.debug(f"Generator cache evicted {evicted[:12]}")
            return generator

    def invalidate(self, fingerprint: str | None) -> bool:
        """Remove um Generator. Retorna True se existia."""
        if not fingerprint:
            return False
        with self._lock:
            removed = self._generators.pop(fingerprint, None) is not None
        if removed:
            logger.debug(f"Generator cache invalidated {fingerprint[:12]}")
        return removed

    def contains(self, fingerprint: str) -> bool:
        with self._lock:
            return fingerprint in self._generators

    def __len__(self) -> int:
        with self._lock:
            return len(self._generators)

    def clear(self) -> None:
        """Limpa o cache. Útil para testes."""
        with self._lock:
            self._generators.clear()


# Instância global
_cache = _GeneratorCache()

# API pública
get_generator = _cache.get
invalidate = _cache.invalidate
is_cached = _cache.contains
clear = _cache.clear


def cache_size() -> int:
    return len(_cache)
