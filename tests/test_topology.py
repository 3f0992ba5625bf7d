"""Tests for the network topology collaborators."""

import math

import pytest

from exceptions import InvalidParameterError
from topology import NullNetworkTopology, SimpleNetworkTopology


def test_null_topology_has_zero_delay() -> None:
    topology = NullNetworkTopology()
    topology.add_link("a", "b", 100, 5)
    topology.remove_link("a", "b")
    assert topology.get_delay("a", "b") == 0.0


def test_direct_link_delay_is_symmetric() -> None:
    topology = SimpleNetworkTopology()
    topology.add_link("dc", "broker", 1000, 0.5)
    assert topology.get_delay("dc", "broker") == pytest.approx(0.5)
    assert topology.get_delay("broker", "dc") == pytest.approx(0.5)
    assert topology.get_bandwidth("broker", "dc") == 1000


def test_delay_uses_lowest_latency_path() -> None:
    topology = SimpleNetworkTopology()
    topology.add_link("a", "b", 100, 1.0)
    topology.add_link("b", "c", 100, 1.0)
    topology.add_link("a", "c", 100, 5.0)
    assert topology.get_delay("a", "c") == pytest.approx(2.0)


def test_remove_link_updates_delay() -> None:
    topology = SimpleNetworkTopology()
    topology.add_link("a", "b", 100, 1.0)
    topology.add_link("b", "c", 100, 1.0)
    topology.add_link("a", "c", 100, 5.0)
    topology.get_delay("a", "c")
    topology.remove_link("b", "a")
    assert topology.get_delay("a", "c") == pytest.approx(5.0)


def test_unknown_or_disconnected_nodes_have_zero_delay() -> None:
    topology = SimpleNetworkTopology()
    topology.add_link("a", "b", 100, 1.0)
    topology.add_link("c", "d", 100, 1.0)
    assert topology.get_delay("a", "zzz") == 0.0
    assert topology.get_delay("a", "d") == 0.0
    assert topology.get_delay("a", "a") == 0.0


def test_negative_link_parameters_raise() -> None:
    with pytest.raises(InvalidParameterError):
        SimpleNetworkTopology().add_link("a", "b", -1, 1.0)


@pytest.mark.parametrize("bandwidth,latency", [
    (100, math.nan),
    (100, math.inf),
    (math.nan, 1.0),
])
def test_non_finite_link_parameters_raise(bandwidth, latency) -> None:
    topology = SimpleNetworkTopology()
    with pytest.raises(InvalidParameterError):
        topology.add_link("a", "b", bandwidth, latency)
    assert topology.links == {}
