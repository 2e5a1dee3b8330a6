import logging
from collections.abc import Callable, Iterable

from howsit_tui.errors import ValidationError
from howsit_tui.memcached.parser import Scope, StatRecord, parse_int
from howsit_tui.runtime.state import GlobalStat, ItemStat, SlabStat, Snapshot


logger = logging.getLogger(__name__)

GlobalSetter = Callable[[GlobalStat, str, int], None]
SlabSetter = Callable[[SlabStat, str, int], None]
ItemSetter = Callable[[ItemStat, str, int], None]


def _copy_int(attr: str) -> Callable[[object, str, int], None]:
    def setter(target: object, value: str, time_ms: int) -> None:
        setattr(target, attr, parse_int(value))

    return setter


def _track_rate(attr: str) -> Callable[[object, str, int], None]:
    def setter(target: object, value: str, time_ms: int) -> None:
        getattr(target, attr).update(parse_int(value), time_ms)

    return setter


def _set_version(target: GlobalStat, value: str, time_ms: int) -> None:
    target.version = value


GLOBAL_FIELDS: dict[str, GlobalSetter] = {
    "uptime": _copy_int("uptime"),
    "version": _set_version,
    "limit_maxbytes": _copy_int("memory_limit"),
    "total_items": _copy_int("total_items"),
    "get_hits": _copy_int("get_hits"),
    "cmd_get": _track_rate("cmd_get"),
    "cmd_set": _track_rate("cmd_set"),
    "evictions": _track_rate("evictions"),
}

SLAB_FIELDS: dict[str, SlabSetter] = {
    "chunk_size": _copy_int("chunk_size"),
    "total_pages": _copy_int("total_pages"),
    "used_chunks": _copy_int("used_chunks"),
    "free_chunks": _copy_int("free_chunks"),
    "mem_requested": _copy_int("mem_requested"),
    "cmd_set": _track_rate("cmd_set"),
    "get_hits": _track_rate("get_hits"),
}

ITEM_FIELDS: dict[str, ItemSetter] = {
    "number": _copy_int("item_count"),
    "evicted": _track_rate("evicted"),
    "evicted_time": _copy_int("evicted_age"),
}


def apply_record(snapshot: Snapshot, record: StatRecord) -> None:
    time_ms = snapshot.stats.time

    if record.scope is Scope.GLOBAL:
        global_setter = GLOBAL_FIELDS.get(record.key)
        if global_setter is not None:
            global_setter(snapshot.stats, record.value, time_ms)
        return

    if record.slab_id is None:
        return

    if record.scope is Scope.SLAB:
        slab = snapshot.slab(record.slab_id)
        slab.active = True
        slab_setter = SLAB_FIELDS.get(record.key)
        if slab_setter is not None:
            slab_setter(slab, record.value, time_ms)
    else:
        item = snapshot.item(record.slab_id)
        item.active = True
        item_setter = ITEM_FIELDS.get(record.key)
        if item_setter is not None:
            item_setter(item, record.value, time_ms)


def apply_records(snapshot: Snapshot, records: Iterable[StatRecord]) -> int:
    applied = 0
    for record in records:
        try:
            apply_record(snapshot, record)
        except ValidationError as exc:
            logger.debug("skipping %s record %s: %s", record.scope.command, record.key, exc)
            continue
        applied += 1
    return applied


def begin_pass(snapshot: Snapshot, scope: Scope) -> None:
    """Mark every slot of ``scope`` inactive ahead of a fresh response."""
    if scope is Scope.SLAB:
        snapshot.deactivate_slabs()
    elif scope is Scope.ITEM:
        snapshot.deactivate_items()


def finish_cycle(snapshot: Snapshot) -> None:
    snapshot.stats.time_prev = snapshot.stats.time
