from howsit_tui.runtime.state import GlobalStat
from howsit_tui.ui.formatting import format_bytes


def status_line(stats: GlobalStat, refresh_s: int) -> str:
    return (
        f"MC SERVER:{stats.server} PORT:{stats.port} VERSION:({stats.version}) "
        f"MEMORY:{format_bytes(stats.memory_limit)} UPTIME:{stats.uptime} "
        f"REFRESH RATE:{refresh_s}s"
    )
