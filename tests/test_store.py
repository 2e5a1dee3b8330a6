from howsit_tui.memcached.parser import Scope, StatRecord, parse_stats_text
from howsit_tui.metrics.store import apply_record, apply_records, begin_pass, finish_cycle
from howsit_tui.runtime.state import Snapshot


def _cycle(snapshot: Snapshot, time_ms: int, raw: str, scope: Scope) -> None:
    snapshot.stats.time = time_ms
    begin_pass(snapshot, scope)
    apply_records(snapshot, parse_stats_text(raw, scope))
    finish_cycle(snapshot)


def test_global_rate_over_five_seconds() -> None:
    snapshot = Snapshot()
    _cycle(snapshot, 0, "STAT cmd_get 100\r\n", Scope.GLOBAL)
    assert snapshot.stats.cmd_get.rate == 0.0
    _cycle(snapshot, 5000, "STAT cmd_get 150\r\n", Scope.GLOBAL)
    assert snapshot.stats.cmd_get.value == 150
    assert snapshot.stats.cmd_get.previous_value == 150
    assert snapshot.stats.cmd_get.rate == 10.0


def test_first_reading_yields_zero_rate() -> None:
    snapshot = Snapshot()
    _cycle(snapshot, 1_700_000_000_000, "STAT evictions 9000\r\nSTAT 3:cmd_set 77\r\n", Scope.GLOBAL)
    assert snapshot.stats.evictions.rate == 0.0


def test_metric_first_seen_in_later_cycle_yields_zero_rate() -> None:
    snapshot = Snapshot()
    _cycle(snapshot, 1000, "STAT 1:cmd_set 10\r\n", Scope.SLAB)
    _cycle(snapshot, 2000, "STAT 1:cmd_set 20\r\nSTAT 2:cmd_set 500\r\n", Scope.SLAB)
    assert snapshot.slabs[1].cmd_set.rate == 10.0
    assert snapshot.slabs[2].cmd_set.rate == 0.0


def test_item_eviction_rate_and_verbatim_fields() -> None:
    snapshot = Snapshot()
    _cycle(snapshot, 1000, "STAT items:4:evicted 10\r\nSTAT items:4:evicted_time 30\r\n", Scope.ITEM)
    _cycle(snapshot, 3000, "STAT items:4:evicted 30\r\nSTAT items:4:number 8\r\n", Scope.ITEM)
    item = snapshot.items[4]
    assert item.evicted.rate == 10.0
    assert item.evicted_age == 30
    assert item.item_count == 8


def test_slab_fields_copied() -> None:
    snapshot = Snapshot()
    raw = "STAT 1:chunk_size 96\r\nSTAT 1:total_pages 3\r\nSTAT 1:used_chunks 7\r\nSTAT 1:free_chunks 2\r\nSTAT 1:mem_requested 600\r\n"
    _cycle(snapshot, 1000, raw, Scope.SLAB)
    slab = snapshot.slabs[1]
    assert (slab.chunk_size, slab.total_pages, slab.used_chunks, slab.free_chunks, slab.mem_requested) == (96, 3, 7, 2, 600)
    assert slab.active


def test_absent_slab_becomes_inactive() -> None:
    snapshot = Snapshot()
    _cycle(snapshot, 1000, "STAT 1:chunk_size 96\r\nSTAT 2:chunk_size 120\r\n", Scope.SLAB)
    assert snapshot.active_slab_ids() == [1, 2]
    _cycle(snapshot, 2000, "STAT 2:chunk_size 120\r\n", Scope.SLAB)
    assert snapshot.active_slab_ids() == [2]
    assert 1 in snapshot.slabs


def test_item_pass_does_not_touch_slab_activation() -> None:
    snapshot = Snapshot()
    _cycle(snapshot, 1000, "STAT 1:chunk_size 96\r\n", Scope.SLAB)
    _cycle(snapshot, 1000, "STAT items:1:number 3\r\n", Scope.ITEM)
    assert snapshot.active_slab_ids() == [1]
    assert snapshot.active_item(1) is not None
    assert snapshot.active_item(2) is None


def test_unknown_fields_and_bad_lines_leave_state_unchanged() -> None:
    snapshot = Snapshot()
    snapshot.stats.time = 1000
    before = repr(snapshot)
    applied = apply_records(snapshot, parse_stats_text("STAT bad\r\nSTAT curr_connections 5\r\n", Scope.GLOBAL))
    assert applied == 1
    assert repr(snapshot) == before


def test_non_numeric_value_defaults_to_zero() -> None:
    snapshot = Snapshot()
    snapshot.stats.uptime = 99
    apply_record(snapshot, StatRecord(Scope.GLOBAL, "uptime", "soon"))
    assert snapshot.stats.uptime == 0


def test_version_copied_verbatim() -> None:
    snapshot = Snapshot()
    apply_record(snapshot, StatRecord(Scope.GLOBAL, "version", "1.6.21"))
    assert snapshot.stats.version == "1.6.21"


def test_slab_beyond_capacity_is_skipped() -> None:
    snapshot = Snapshot(capacity=4)
    records = [
        StatRecord(Scope.SLAB, "chunk_size", "96", 4),
        StatRecord(Scope.SLAB, "chunk_size", "96", 5),
    ]
    assert apply_records(snapshot, records) == 1
    assert snapshot.active_slab_ids() == [4]


def test_finish_cycle_sets_baseline() -> None:
    snapshot = Snapshot()
    snapshot.stats.time = 4242
    finish_cycle(snapshot)
    assert snapshot.stats.time_prev == 4242


def test_returning_slab_rate_spans_the_missed_cycles() -> None:
    snapshot = Snapshot()
    _cycle(snapshot, 0, "STAT 1:cmd_set 0\r\nSTAT 2:cmd_set 0\r\n", Scope.SLAB)
    for time_ms in range(5000, 50000, 5000):
        _cycle(snapshot, time_ms, f"STAT 1:cmd_set {time_ms // 100}\r\n", Scope.SLAB)
    assert snapshot.active_slab_ids() == [1]

    _cycle(snapshot, 50000, "STAT 1:cmd_set 500\r\nSTAT 2:cmd_set 500\r\n", Scope.SLAB)
    assert snapshot.slabs[1].cmd_set.rate == 10.0
    assert snapshot.slabs[2].cmd_set.rate == 10.0
    assert snapshot.slabs[2].cmd_set.read_at == 50000
