import asyncio
import logging

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import Footer, Header

from howsit_tui.config import Settings
from howsit_tui.errors import TransportError
from howsit_tui.memcached.client import StatsSource, make_client
from howsit_tui.memcached.collectors import StatsBatch, collect_stats
from howsit_tui.runtime.controller import DashboardController
from howsit_tui.ui.widgets.stats_grid import StatsGrid


logger = logging.getLogger(__name__)


class DashboardApp(App[None]):
    TITLE = "howsit"
    BINDINGS = [("q", "quit", "Quit"), ("r", "toggle_rates", "Rates")]

    def __init__(self, settings: Settings, source: StatsSource | None = None) -> None:
        super().__init__()
        self.dashboard_settings = settings
        self.controller = DashboardController(settings)
        self._source = source
        self._refreshing = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Container():
            yield StatsGrid("Loading...", id="dashboard")
        yield Footer()

    async def on_mount(self) -> None:
        self.set_interval(float(self.dashboard_settings.refresh_seconds), self.refresh_data)
        await self.refresh_data()

    def action_toggle_rates(self) -> None:
        self.controller.toggle_rates()
        self.draw()

    async def refresh_data(self) -> None:
        if self._refreshing:
            return
        self._refreshing = True
        try:
            # Only the network wait leaves the event loop; the snapshot is mutated here.
            batch = await asyncio.to_thread(self._collect)
        except TransportError as exc:
            logger.error("refresh failed: %s", exc)
            self.exit(return_code=1, message=f"howsit: {exc}")
            return
        finally:
            self._refreshing = False
        self.controller.apply(batch)
        self.draw()

    def draw(self) -> None:
        self.query_one("#dashboard", StatsGrid).paint(self.controller.render())

    def _collect(self) -> StatsBatch:
        if self._source is None:
            self._source = make_client(self.dashboard_settings)
        return collect_stats(self._source)


def run(settings: Settings) -> int:
    app = DashboardApp(settings)
    app.run()
    return app.return_code or 0
