"""Typed contracts for relay attribution."""

from collections.abc import Mapping
from dataclasses import dataclass


class InvalidSuffixError(ValueError):
    """Relay suffix outside the single-byte range."""


@dataclass(frozen=True)
class Node:
    node_id: int
    short_name: str = ""
    long_name: str = ""
    last_heard: int = 0
    snr: float = 0.0
    rssi: float = 0.0
    hops_away: int = 0
    hop_start: int = 0
    relay_suffix: int | None = None
    user_id: str = ""
    role: str = ""
    uptime_seconds: int = 0
    mismatch_key: bool = False

    @property
    def heard(self) -> bool:
        return self.last_heard != 0

    @property
    def relayed(self) -> bool:
        """True when the last packet arrived through at least one relay."""
        return self.hops_away > 0 and self.relay_suffix is not None


NodeSnapshot = Mapping[int, Node]


@dataclass(frozen=True)
class NoAttribution:
    pass


@dataclass(frozen=True)
class Unambiguous:
    node: Node


@dataclass(frozen=True)
class Ambiguous:
    candidates: tuple[Node, ...]


Resolution = NoAttribution | Unambiguous | Ambiguous


@dataclass(frozen=True)
class RelayAttribution:
    """Resolver output: the raw suffix, the resolution and its best candidate."""

    suffix: int
    resolution: Resolution
    best: Node | None

    @property
    def candidates(self) -> tuple[Node, ...]:
        if isinstance(self.resolution, Ambiguous):
            return self.resolution.candidates
        if isinstance(self.resolution, Unambiguous):
            return (self.resolution.node,)
        return tuple()

    @property
    def ambiguous(self) -> bool:
        return isinstance(self.resolution, Ambiguous)
