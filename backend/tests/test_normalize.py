import math
from datetime import date, datetime

import pytest

from app.utils.decimal_math import round_ratio, round_score, to_cents
from app.utils.months import month_window, shift_months
from app.utils.normalize import clamp, exp_decay, log_saturation, mean, safe_divide, std


def test_clamp_and_safe_divide_guard_edges() -> None:
    assert clamp(1.25) == 1.0
    assert clamp(-0.3) == 0.0
    assert clamp(-0.3, -1, 1) == -0.3
    assert safe_divide(500, 0) == 500
    assert safe_divide(0, 0) == 0
    assert safe_divide(1, 4) == 0.25


def test_mean_and_population_std() -> None:
    assert mean([]) == 0.0
    assert std([]) == 0.0
    assert std([5, 5, 5]) == 0.0
    assert std([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)


def test_curve_shaping() -> None:
    assert log_saturation(0, 6) == 0.0
    assert log_saturation(6, 6) == pytest.approx(1.0)
    assert log_saturation(24, 6) == 1.0
    assert log_saturation(3, 6) == pytest.approx(math.log(4) / math.log(7))
    assert exp_decay(0, 1.2) == 1.0
    assert exp_decay(1, 1.2) == pytest.approx(math.exp(-1.2))


def test_to_cents_rounds_half_up_once() -> None:
    assert to_cents("19.99") == 1999
    assert to_cents("10.005") == 1001
    assert to_cents("0.1") == 10
    assert to_cents(None) == 0
    with pytest.raises(ValueError):
        to_cents("twelve")


@pytest.mark.parametrize("raw", ["Infinity", "-Infinity", "NaN", "1e30"])
def test_to_cents_rejects_non_finite_and_oversized_amounts(raw) -> None:
    with pytest.raises(ValueError):
        to_cents(raw)


def test_half_up_rounding_helpers() -> None:
    assert round_score(72.5) == 73
    assert round_score(86.45) == 86
    assert round_ratio(0.8555) == 0.856
    assert round_ratio(1.0) == 1.0


def test_month_helpers() -> None:
    assert shift_months(date(2026, 1, 1), -1) == date(2025, 12, 1)
    assert shift_months(date(2026, 11, 1), 2) == date(2027, 1, 1)
    assert month_window(datetime(2026, 3, 31, 23, 59)) == (date(2026, 3, 1), date(2026, 4, 1))
