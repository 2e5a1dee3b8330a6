from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PageWindow:
    slab_ids: tuple[int, ...] = ()
    truncated: bool = False
    last_shown: int | None = None


@dataclass
class Paginator:
    """Rotates through pages of slabs, one page per data refresh.

    ``start_index`` is a zero-based slab index (slab id - 1). Drawing never
    moves the window; only :meth:`advance`, called once new data has been
    loaded, does.
    """

    page_capacity: int
    slab_capacity: int = 100
    start_index: int = 0
    last_window: PageWindow = field(default_factory=PageWindow)

    def visible(self, active_ids: Sequence[int]) -> PageWindow:
        shown: list[int] = []
        truncated = False
        for slab_id in active_ids:
            if slab_id - 1 < self.start_index:
                continue
            if len(shown) >= self.page_capacity:
                truncated = True
                break
            shown.append(slab_id)

        window = PageWindow(
            slab_ids=tuple(shown),
            truncated=truncated,
            last_shown=shown[-1] if truncated else None,
        )
        self.last_window = window
        return window

    def advance(self, active_ids: Sequence[int]) -> None:
        previous = self.last_window
        if previous.truncated and previous.last_shown is not None:
            # last_shown is 1-based, so it is already the next slab's index.
            self.start_index = previous.last_shown
            if self.start_index >= self.slab_capacity:
                self.start_index = 0
        else:
            self.start_index = 0

        if not any(slab_id - 1 >= self.start_index for slab_id in active_ids):
            self.start_index = 0
        self.last_window = PageWindow()
