"""Tests for the linear power model."""

import math

import numpy as np
import pytest

from exceptions import InvalidParameterError, OutOfRangeError
from power import PowerMeasurement, PowerModel


class HostState:
    """Activity state source with fixed answers."""

    def __init__(self, ever_started, active):
        self.ever_started = ever_started
        self.active = active

    def has_ever_started(self):
        return self.ever_started

    def is_active(self):
        return self.active


@pytest.fixture
def model() -> PowerModel:
    return PowerModel(max_power=100, static_power=20)


# --- construction ---

def test_valid_model_is_created() -> None:
    m = PowerModel(100, 50)
    assert (m.max_power, m.static_power) == (100.0, 50.0)
    assert (m.startup_power, m.shutdown_power) == (0.0, 0.0)


def test_equal_max_and_static_power_is_allowed() -> None:
    PowerModel(80, 80)


def test_max_below_static_raises() -> None:
    with pytest.raises(InvalidParameterError):
        PowerModel(50, 100)


@pytest.mark.parametrize("max_power,static_power", [
    (-1, 0),
    (100, -5),
    (math.inf, 10),
    (100, math.nan),
    ("100", 10),
    (True, 0),
])
def test_implausible_power_raises(max_power, static_power) -> None:
    with pytest.raises(InvalidParameterError):
        PowerModel(max_power, static_power)


@pytest.mark.parametrize("kwargs", [{"startup_power": -1}, {"shutdown_power": math.inf}])
def test_implausible_lifecycle_cost_raises(kwargs) -> None:
    with pytest.raises(InvalidParameterError):
        PowerModel(100, 20, **kwargs)


def test_invalid_parameter_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        PowerModel(50, 100)


def test_calibration_is_read_only(model) -> None:
    with pytest.raises(AttributeError):
        model.max_power = 10


# --- measure ---

@pytest.mark.parametrize("utilization", [0.0, 0.3, 1.0])
def test_inactive_host_draws_nothing(model, utilization) -> None:
    assert model.measure(False, utilization) == PowerMeasurement(0.0, 0.0)


@pytest.mark.parametrize("utilization,expected", [
    (0.0, (20, 0)),
    (1.0, (20, 80)),
    (0.5, (20, 40)),
])
def test_active_host_measurement(model, utilization, expected) -> None:
    m = model.measure(True, utilization)
    assert (m.static_power, m.dynamic_power) == pytest.approx(expected)
    assert m.total_power == pytest.approx(sum(expected))


# --- get_power ---

@pytest.mark.parametrize("utilization", [-0.1, 1.1, math.nan])
def test_get_power_out_of_range(model, utilization) -> None:
    with pytest.raises(OutOfRangeError):
        model.get_power(utilization)


def test_get_power_for_never_started_host(model) -> None:
    assert model.get_power(0.5) == pytest.approx(60)
    assert model.get_power(0.5, HostState(False, False)) == pytest.approx(60)


def test_get_power_adds_startup_cost() -> None:
    m = PowerModel(100, 20, startup_power=7, shutdown_power=3)
    assert m.get_power(0.5, HostState(True, True)) == pytest.approx(67)


def test_get_power_adds_startup_and_shutdown_cost() -> None:
    m = PowerModel(100, 20, startup_power=7, shutdown_power=3)
    assert m.get_power(0.5, HostState(True, False)) == pytest.approx(70)


def test_get_power_bounds(model) -> None:
    assert model.get_power(0) == pytest.approx(20)
    assert model.get_power(1) == pytest.approx(100)


# --- power_curve ---

def test_power_curve_matches_scalar_query(model) -> None:
    utilizations = np.linspace(0, 1, 11)
    expected = [model.get_power(u) for u in utilizations]
    assert model.power_curve(utilizations).tolist() == pytest.approx(expected)


@pytest.mark.parametrize("utilizations", [[0.2, 1.5], [-0.1, 0.5], [0.5, math.nan]])
def test_power_curve_rejects_out_of_range(model, utilizations) -> None:
    with pytest.raises(OutOfRangeError):
        model.power_curve(utilizations)


# --- PowerMeasurement ---

def test_measurement_arithmetic() -> None:
    a = PowerMeasurement(10, 5)
    b = PowerMeasurement(2, 1)
    assert a + b == PowerMeasurement(12, 6)
    assert a * 2 == PowerMeasurement(20, 10)
    assert 3 * b == PowerMeasurement(6, 3)
    assert sum([a, b], PowerMeasurement()).total_power == pytest.approx(18)


def test_zero_measurement() -> None:
    assert PowerMeasurement().total_power == 0
