"""Candidate selection for truncated relay identifiers."""

from .config import RELAY_NODE_SUFFIX_MASK
from .types import InvalidSuffixError, Node, NodeSnapshot


def validate_suffix(value: int) -> int:
    """Return value unchanged if it is a single byte, else raise InvalidSuffixError."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSuffixError(f"Relay suffix must be an integer, got {value!r}")
    if value < 0 or value > RELAY_NODE_SUFFIX_MASK:
        raise InvalidSuffixError(f"Relay suffix out of range 0..255: {value}")
    return value


def relay_suffix_of(node_id: int) -> int:
    """Truncate a node number to the low byte carried in relay telemetry."""
    return node_id & RELAY_NODE_SUFFIX_MASK


def is_relay_candidate(node: Node, *, owner_id: int | None, suffix: int) -> bool:
    if node.node_id == owner_id:
        return False
    if not node.heard:
        return False
    return relay_suffix_of(node.node_id) == suffix


def filter_relay_candidates(
    snapshot: NodeSnapshot,
    owner_id: int | None,
    suffix: int,
) -> tuple[Node, ...]:
    """Select heard, non-owner nodes whose low byte matches suffix.

    The snapshot is read once; the result carries no ordering guarantee.
    """
    suffix = validate_suffix(suffix)
    nodes = tuple(snapshot.values())
    return tuple(
        node
        for node in nodes
        if is_relay_candidate(node, owner_id=owner_id, suffix=suffix)
    )
