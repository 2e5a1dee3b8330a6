_KIB = 1024
_MIB = 1024 * 1024
_GIB = 1024 * 1024 * 1024


def format_bytes(num_bytes: int) -> str:
    if num_bytes < _KIB:
        return str(num_bytes)
    if num_bytes < _MIB:
        return f"{num_bytes / _KIB:.1f}K"
    if num_bytes < _GIB:
        return f"{num_bytes / _MIB:.1f}M"
    return f"{num_bytes / _GIB:.1f}G"


def format_count(value: int) -> str:
    return str(value)


def format_rate(value: float) -> str:
    return f"{value:.1f}"


def format_ratio(value: float) -> str:
    return f"{value:.2f}"
