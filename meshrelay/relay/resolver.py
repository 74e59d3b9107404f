"""Relay attribution from a truncated relay suffix."""

import logging

from .candidates import filter_relay_candidates, validate_suffix
from .config import DEFAULT_RELAY_CONFIG, RelayConfig
from .scorer import best_candidate, sort_candidates
from .types import (
    Ambiguous,
    NoAttribution,
    Node,
    NodeSnapshot,
    RelayAttribution,
    Unambiguous,
)

log = logging.getLogger(__name__)


def resolve_candidates(
    suffix: int,
    candidates: tuple[Node, ...],
    config: RelayConfig = DEFAULT_RELAY_CONFIG,
) -> RelayAttribution:
    """Turn an already-filtered candidate set into a RelayAttribution."""
    suffix = validate_suffix(suffix)
    if not candidates:
        return RelayAttribution(suffix=suffix, resolution=NoAttribution(), best=None)

    best = best_candidate(candidates, config)
    if len(candidates) == 1:
        return RelayAttribution(
            suffix=suffix, resolution=Unambiguous(node=candidates[0]), best=best
        )

    ordered = sort_candidates(candidates, config)
    return RelayAttribution(
        suffix=suffix, resolution=Ambiguous(candidates=ordered), best=best
    )


def resolve_relay(
    snapshot: NodeSnapshot,
    owner_id: int | None,
    suffix: int,
    *,
    config: RelayConfig = DEFAULT_RELAY_CONFIG,
) -> RelayAttribution:
    """Resolve which known node(s) most plausibly relayed for this suffix.

    Raises InvalidSuffixError when suffix is not in 0..255.
    """
    candidates = filter_relay_candidates(snapshot, owner_id, suffix)
    attribution = resolve_candidates(suffix, candidates, config)
    log.debug(
        f"Relay suffix 0x{suffix:02X}: {len(candidates)} candidate(s), "
        f"best={attribution.best.node_id if attribution.best else None}"
    )
    return attribution


def resolve_node_relay(
    node: Node,
    snapshot: NodeSnapshot,
    owner_id: int | None,
    *,
    config: RelayConfig = DEFAULT_RELAY_CONFIG,
) -> RelayAttribution | None:
    """Resolve the last relay of node, or None when it was heard directly."""
    if not node.relayed:
        return None
    return resolve_relay(snapshot, owner_id, node.relay_suffix, config=config)
