from dataclasses import dataclass

from howsit_tui.config import PAGE_SIZE, WARN_THRESHOLD
from howsit_tui.metrics.derived import compute_hit_ratio
from howsit_tui.runtime.pagination import PageWindow
from howsit_tui.runtime.state import Snapshot
from howsit_tui.ui.formatting import format_bytes, format_count, format_rate, format_ratio
from howsit_tui.ui.widgets.status_bar import status_line


STYLE_PLAIN = ""
STYLE_HEADER = "header"
STYLE_LABEL = "label"
STYLE_WARNING = "warning"


@dataclass(frozen=True)
class Column:
    label: str
    rate_label: str
    offset: int


# Character offsets of the slab table columns.
COLUMN_LAYOUT: tuple[Column, ...] = (
    Column("SLAB", "SLAB", 0),
    Column("SIZE", "SIZE", 10),
    Column("USED", "USED", 18),
    Column("PAGES", "PAGES", 30),
    Column("WASTED", "WASTED", 40),
    Column("EVICT_AGE", "EVICT_AGE", 54),
    Column("EVICTED", "EVICTED/s", 66),
    Column("SET", "SET/s", 78),
    Column("HIT", "HIT/s", 92),
)


@dataclass(frozen=True)
class Cell:
    row: int
    column: int
    text: str
    style: str = STYLE_PLAIN


def _aggregate_rows(snapshot: Snapshot, show_rates: bool) -> list[str]:
    stats = snapshot.stats
    if show_rates:
        lines = [
            f"EVICTIONS/s: {format_rate(stats.evictions.rate)}",
            f"SETS/s: {format_rate(stats.cmd_set.rate)}",
            f"GETS/s: {format_rate(stats.cmd_get.rate)}",
        ]
    else:
        lines = [
            f"EVICTIONS: {format_count(stats.evictions.value)}",
            f"SETS: {format_count(stats.cmd_set.value)}",
            f"GETS: {format_count(stats.cmd_get.value)}",
        ]
    ratio = compute_hit_ratio(stats.get_hits, stats.cmd_get.value)
    lines.append(f"HIT RATIO: {format_ratio(ratio)}")
    return lines


def build_render_model(
    snapshot: Snapshot,
    window: PageWindow,
    show_rates: bool,
    refresh_s: int,
    page_size: int = PAGE_SIZE,
    warn_threshold: int = WARN_THRESHOLD,
) -> list[Cell]:
    cells = [Cell(0, 0, status_line(snapshot.stats, refresh_s), STYLE_HEADER)]
    for index, column in enumerate(COLUMN_LAYOUT):
        cells.append(Cell(1, index, column.rate_label if show_rates else column.label, STYLE_LABEL))

    row = 1
    for slab_id in window.slab_ids:
        slab = snapshot.slabs[slab_id]
        item = snapshot.active_item(slab_id)
        evicted_age = item.evicted_age if item is not None else 0
        row += 1

        wasted = slab.total_pages * page_size - slab.mem_requested
        age_style = STYLE_WARNING if 0 < evicted_age < warn_threshold else STYLE_PLAIN
        if show_rates:
            evicted = format_rate(item.evicted.rate) if item is not None else format_rate(0.0)
            sets = format_rate(slab.cmd_set.rate)
            hits = format_rate(slab.get_hits.rate)
        else:
            evicted = format_count(item.evicted.value) if item is not None else format_count(0)
            sets = format_count(slab.cmd_set.value)
            hits = format_count(slab.get_hits.value)

        texts = (
            (format_count(slab.slab_id), STYLE_PLAIN),
            (format_count(slab.chunk_size), STYLE_PLAIN),
            (format_count(slab.used_chunks), STYLE_PLAIN),
            (format_count(slab.total_pages), STYLE_PLAIN),
            (format_bytes(wasted), STYLE_PLAIN),
            (format_count(evicted_age), age_style),
            (evicted, STYLE_PLAIN),
            (sets, STYLE_PLAIN),
            (hits, STYLE_PLAIN),
        )
        cells.extend(Cell(row, index, text, style) for index, (text, style) in enumerate(texts))

    for line in _aggregate_rows(snapshot, show_rates):
        row += 1
        cells.append(Cell(row, 0, line))
    return cells
