"""
Rate limit muy simple en memoria (por identificador + ruta).

Uso típico:
- Login por IP: limiter.allow((ip, "/auth/login"))
- Login admin por IP: limiter.allow((ip, "/auth/login/admin"))

Una instancia por aplicación (`app.state.rate_limiter`); no se comparte entre procesos.
"""
from time import time
from typing import Dict, Tuple


class RateLimiter:
    def __init__(self, limit: int = 5, window_seconds: int = 60) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._buckets: Dict[Tuple[str, str], list[float]] = {}

    def allow(self, key: Tuple[str, str]) -> bool:
        """Devuelve True si se permite la acción y registra el intento.

        key: (identificador, ruta)
        """
        now = time()
        q = self._buckets.setdefault(key, [])
        # elimina timestamps fuera de ventana
        q[:] = [t for t in q if now - t < self.window_seconds]
        if len(q) >= self.limit:
            return False
        q.append(now)
        return True

    def reset(self) -> None:
        """Limpia los buckets (útil en tests o reinicios)."""
        self._buckets.clear()
