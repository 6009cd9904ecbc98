"""Property tests for trend classification."""

from hypothesis import given, settings
from hypothesis import strategies as st

from ci_baseline.models import Direction, Trend
from ci_baseline.trends import analyze_trend

from .strategies import increasing_series, series_values


@given(values=st.lists(series_values, max_size=1), inverse=st.booleans())
@settings(max_examples=100)
def test_short_series_is_insufficient(values: list[float], inverse: bool):
    result = analyze_trend(values, inverse=inverse)
    assert result.trend == Trend.INSUFFICIENT_DATA
    assert result.slope is None


@given(
    value=series_values,
    length=st.integers(min_value=2, max_value=50),
    inverse=st.booleans(),
)
@settings(max_examples=300)
def test_constant_series_is_stable(value: float, length: int, inverse: bool):
    result = analyze_trend([value] * length, inverse=inverse)
    assert result.trend == Trend.STABLE
    assert result.direction == Direction.NO_CHANGE


@given(values=increasing_series())
@settings(max_examples=300)
def test_rising_series_improves(values: list[float]):
    result = analyze_trend(values)
    assert result.trend == Trend.IMPROVING
    assert result.direction == Direction.INCREASING


@given(values=increasing_series())
@settings(max_examples=300)
def test_rising_inverse_series_worsens(values: list[float]):
    result = analyze_trend(values, inverse=True)
    assert result.trend == Trend.WORSENING
    assert result.direction == Direction.INCREASING


@given(values=increasing_series())
@settings(max_examples=300)
def test_reversing_series_flips_label(values: list[float]):
    rising = analyze_trend(values)
    falling = analyze_trend(values[::-1])
    assert falling.trend == Trend.WORSENING
    assert falling.direction == Direction.DECREASING
    assert falling.slope < 0 < rising.slope
