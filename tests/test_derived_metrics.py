from howsit_tui.metrics.derived import compute_hit_ratio, compute_rate, elapsed_seconds


def test_compute_hit_ratio() -> None:
    assert compute_hit_ratio(90, 100) == 0.9


def test_compute_hit_ratio_zero_gets() -> None:
    assert compute_hit_ratio(0, 0) == 0.0
    assert compute_hit_ratio(5, 0) == 0.0


def test_compute_rate() -> None:
    assert compute_rate(150, 100, 5.0) == 10.0


def test_compute_rate_without_elapsed_time() -> None:
    assert compute_rate(150, 100, 0.0) == 0.0
    assert compute_rate(150, 100, -1.0) == 0.0


def test_elapsed_seconds_needs_baseline() -> None:
    assert elapsed_seconds(5000, None) == 0.0
    assert elapsed_seconds(5000, 0) == 5.0
    assert elapsed_seconds(15000, 10000) == 5.0
