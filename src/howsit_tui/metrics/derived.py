def compute_hit_ratio(get_hits: int, cmd_get: int) -> float:
    if cmd_get <= 0:
        return 0.0
    return get_hits / cmd_get


def compute_rate(value: int, previous_value: int, elapsed_s: float) -> float:
    if elapsed_s <= 0:
        return 0.0
    return (value - previous_value) / elapsed_s


def elapsed_seconds(time_ms: int, time_prev_ms: int | None) -> float:
    """Seconds between two refresh cycles, 0.0 until a baseline cycle exists."""
    if time_prev_ms is None:
        return 0.0
    return (time_ms - time_prev_ms) / 1000.0
