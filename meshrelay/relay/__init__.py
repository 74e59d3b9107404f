"""Relay attribution from truncated relay suffixes."""

from .resolver import resolve_node_relay, resolve_relay
from .types import (
    Ambiguous,
    InvalidSuffixError,
    NoAttribution,
    Node,
    RelayAttribution,
    Unambiguous,
)

__all__ = [
    "Ambiguous",
    "InvalidSuffixError",
    "NoAttribution",
    "Node",
    "RelayAttribution",
    "Unambiguous",
    "resolve_node_relay",
    "resolve_relay",
]
