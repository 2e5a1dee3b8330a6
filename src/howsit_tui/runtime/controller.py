import logging

from howsit_tui.config import Settings
from howsit_tui.memcached.collectors import StatsBatch
from howsit_tui.memcached.parser import parse_stats_text
from howsit_tui.metrics.store import apply_records, begin_pass, finish_cycle
from howsit_tui.runtime.pagination import Paginator
from howsit_tui.runtime.state import GlobalStat, Snapshot
from howsit_tui.ui.screens.dashboard import Cell, build_render_model


logger = logging.getLogger(__name__)


class DashboardController:
    """Owns the snapshot and the pagination state between refreshes."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.snapshot = Snapshot(
            stats=GlobalStat(server=settings.server, port=settings.port),
            capacity=settings.slab_capacity,
        )
        self.paginator = Paginator(
            page_capacity=settings.max_slabs_per_page,
            slab_capacity=settings.slab_capacity,
        )
        self.show_rates = False
        self.cycles = 0

    def apply(self, batch: StatsBatch) -> None:
        snapshot = self.snapshot
        snapshot.stats.time = batch.time_ms
        for scope, raw in batch.responses:
            begin_pass(snapshot, scope)
            applied = apply_records(snapshot, parse_stats_text(raw, scope))
            logger.debug("applied %d %r records", applied, scope.command)
        finish_cycle(snapshot)
        self.paginator.advance(snapshot.active_slab_ids())
        self.cycles += 1

    def toggle_rates(self) -> bool:
        self.show_rates = not self.show_rates
        return self.show_rates

    def render(self) -> list[Cell]:
        window = self.paginator.visible(self.snapshot.active_slab_ids())
        return build_render_model(
            self.snapshot,
            window,
            self.show_rates,
            self.settings.refresh_seconds,
            page_size=self.settings.page_size,
            warn_threshold=self.settings.warn_threshold,
        )
