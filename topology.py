# file: topology.py

"""Network topology collaborators: link bookkeeping and inter-node delay."""

import logging
from abc import ABC, abstractmethod

import numpy as np

from exceptions import InvalidParameterError

logger = logging.getLogger(__name__)

class NetworkTopology(ABC):
    """Links between simulation nodes and the communication delay they imply."""

    @abstractmethod
    def add_link(self, src, dest, bandwidth, latency):
        pass

    @abstractmethod
    def remove_link(self, src, dest):
        pass

    @abstractmethod
    def get_delay(self, src, dest) -> float:
        pass

class NullNetworkTopology(NetworkTopology):
    """Topology without a network: links are ignored and every delay is zero."""

    def add_link(self, src, dest, bandwidth, latency):
        pass

    def remove_link(self, src, dest):
        pass

    def get_delay(self, src, dest) -> float:
        return 0.0

class SimpleNetworkTopology(NetworkTopology):
    """
    In-memory bidirectional topology. The delay between two nodes is the
    lowest total latency over any path linking them; unknown nodes,
    disconnected pairs and a node with itself have zero delay.
    """
    def __init__(self):
        self.nodes = {}   # node -> matrix index
        self.links = {}   # frozenset({src, dest}) -> (bandwidth, latency)
        self._delays = None

    def add_link(self, src, dest, bandwidth, latency):
        if not (np.isfinite(bandwidth) and np.isfinite(latency)):
            raise InvalidParameterError(
                f"Link bandwidth and latency must be finite, got {bandwidth} and {latency}"
            )
        if bandwidth < 0 or latency < 0:
            raise InvalidParameterError(
                f"Link bandwidth and latency cannot be negative, got {bandwidth} and {latency}"
            )
        for node in (src, dest):
            if node not in self.nodes:
                self.nodes[node] = len(self.nodes)
        self.links[frozenset((src, dest))] = (bandwidth, latency)
        self._delays = None
        logger.debug("Added link %s <-> %s (bw=%s, lat=%s)", src, dest, bandwidth, latency)

    def remove_link(self, src, dest):
        if self.links.pop(frozenset((src, dest)), None) is not None:
            self._delays = None
            logger.debug("Removed link %s <-> %s", src, dest)

    def get_bandwidth(self, src, dest):
        """Bandwidth of the direct link between two nodes, 0.0 when there is none."""
        link = self.links.get(frozenset((src, dest)))
        return link[0] if link else 0.0

    def get_delay(self, src, dest) -> float:
        if src == dest or src not in self.nodes or dest not in self.nodes:
            return 0.0
        if self._delays is None:
            self._delays = self._shortest_delays()
        delay = self._delays[self.nodes[src], self.nodes[dest]]
        return float(delay) if np.isfinite(delay) else 0.0

    def _shortest_delays(self):
        """All-pairs minimum latency (Floyd-Warshall over the link matrix)."""
        n = len(self.nodes)
        delays = np.full((n, n), np.inf)
        np.fill_diagonal(delays, 0.0)
        for pair, (_, latency) in self.links.items():
            ends = tuple(pair)
            i = self.nodes[ends[0]]
            j = self.nodes[ends[-1]]
            delays[i, j] = delays[j, i] = min(delays[i, j], latency)
        for k in range(n):
            np.minimum(delays, delays[:, k, None] + delays[None, k, :], out=delays)
        return delays
