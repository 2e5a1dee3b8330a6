import time
from collections.abc import Callable
from dataclasses import dataclass

from howsit_tui.memcached.client import StatsSource
from howsit_tui.memcached.parser import Scope


# Slabs first so the item pass can line up with them, globals last.
REFRESH_SEQUENCE: tuple[Scope, ...] = (Scope.SLAB, Scope.ITEM, Scope.GLOBAL)


@dataclass(frozen=True)
class StatsBatch:
    time_ms: int
    responses: tuple[tuple[Scope, str], ...]


def current_millis() -> int:
    return int(time.time() * 1000)


def collect_stats(source: StatsSource, clock: Callable[[], int] = current_millis) -> StatsBatch:
    """Fetch every response of one refresh; raises TransportError on the first failure."""
    time_ms = clock()
    responses = tuple((scope, source.fetch(scope.command)) for scope in REFRESH_SEQUENCE)
    return StatsBatch(time_ms=time_ms, responses=responses)
