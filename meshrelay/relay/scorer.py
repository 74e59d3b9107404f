"""Signal-quality scoring for relay candidates."""

import math

from .config import DEFAULT_RELAY_CONFIG, RelayConfig
from .types import Node


def _as_float(value: float | int | None) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def signal_score(node: Node, config: RelayConfig = DEFAULT_RELAY_CONFIG) -> float:
    """Combine SNR and RSSI into a higher-is-better score.

    score = snr * 3 + (rssi + 120) with the default config. Missing or
    non-finite signal data counts as 0.0.
    """
    snr = _as_float(node.snr)
    rssi = _as_float(node.rssi)
    return snr * config.snr_weight + (rssi + config.rssi_offset)


def _candidate_sort_key(
    node: Node, config: RelayConfig = DEFAULT_RELAY_CONFIG
) -> tuple[float, int]:
    return (-signal_score(node, config), node.node_id)


def sort_candidates(
    nodes: tuple[Node, ...] | list[Node],
    config: RelayConfig = DEFAULT_RELAY_CONFIG,
) -> tuple[Node, ...]:
    """Order by descending score; equal scores by ascending node number."""
    return tuple(sorted(nodes, key=lambda node: _candidate_sort_key(node, config)))


def best_candidate(
    nodes: tuple[Node, ...] | list[Node],
    config: RelayConfig = DEFAULT_RELAY_CONFIG,
) -> Node | None:
    """Highest-scoring node under the same tie-break as sort_candidates."""
    if not nodes:
        return None
    return min(nodes, key=lambda node: _candidate_sort_key(node, config))
