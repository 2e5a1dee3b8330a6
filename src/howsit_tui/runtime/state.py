from dataclasses import dataclass, field

from howsit_tui.errors import ValidationError
from howsit_tui.metrics.derived import compute_rate, elapsed_seconds


@dataclass
class RateMetric:
    value: int = 0
    previous_value: int = 0
    rate: float = 0.0
    read_at: int | None = None

    def update(self, value: int, time_ms: int) -> None:
        self.value = value
        # Measured against this metric's own last reading, which may be several
        # cycles old when a slab drops out of the response and comes back.
        self.rate = compute_rate(value, self.previous_value, elapsed_seconds(time_ms, self.read_at))
        self.previous_value = value
        self.read_at = time_ms


@dataclass
class SlabStat:
    slab_id: int
    chunk_size: int = 0
    total_pages: int = 0
    used_chunks: int = 0
    free_chunks: int = 0
    mem_requested: int = 0
    cmd_set: RateMetric = field(default_factory=RateMetric)
    get_hits: RateMetric = field(default_factory=RateMetric)
    active: bool = False


@dataclass
class ItemStat:
    slab_id: int
    item_count: int = 0
    evicted: RateMetric = field(default_factory=RateMetric)
    evicted_age: int = 0
    active: bool = False


@dataclass
class GlobalStat:
    server: str = ""
    port: int = 0
    time: int = 0
    time_prev: int | None = None
    uptime: int = 0
    version: str = "N/A"
    memory_limit: int = 0
    cmd_get: RateMetric = field(default_factory=RateMetric)
    cmd_set: RateMetric = field(default_factory=RateMetric)
    evictions: RateMetric = field(default_factory=RateMetric)
    total_items: int = 0
    get_hits: int = 0


@dataclass
class Snapshot:
    """Current state of every tracked metric.

    Slab and item records are kept for the life of the process so their rate
    baselines survive a cycle in which the slab was not reported; the
    ``active`` flag says whether the latest response mentioned them.
    """

    stats: GlobalStat = field(default_factory=GlobalStat)
    slabs: dict[int, SlabStat] = field(default_factory=dict)
    items: dict[int, ItemStat] = field(default_factory=dict)
    capacity: int = 100

    def _check_slab_id(self, slab_id: int) -> None:
        if not 1 <= slab_id <= self.capacity:
            raise ValidationError(f"slab id {slab_id} outside 1..{self.capacity}")

    def slab(self, slab_id: int) -> SlabStat:
        self._check_slab_id(slab_id)
        if slab_id not in self.slabs:
            self.slabs[slab_id] = SlabStat(slab_id=slab_id)
        return self.slabs[slab_id]

    def item(self, slab_id: int) -> ItemStat:
        self._check_slab_id(slab_id)
        if slab_id not in self.items:
            self.items[slab_id] = ItemStat(slab_id=slab_id)
        return self.items[slab_id]

    def active_item(self, slab_id: int) -> ItemStat | None:
        item = self.items.get(slab_id)
        if item is None or not item.active:
            return None
        return item

    def active_slab_ids(self) -> list[int]:
        return sorted(slab_id for slab_id, slab in self.slabs.items() if slab.active)

    def deactivate_slabs(self) -> None:
        for slab in self.slabs.values():
            slab.active = False

    def deactivate_items(self) -> None:
        for item in self.items.values():
            item.active = False
