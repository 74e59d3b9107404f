"""Text rendering for relay attribution and hop telemetry."""

from .config import DEFAULT_RELAY_CONFIG, RelayConfig
from .types import Ambiguous, NoAttribution, Node, RelayAttribution, Unambiguous

_NODE_NUMBER_MASK = 0xFFFFFFFF


def format_suffix_hex(suffix: int) -> str:
    """Fixed two-digit uppercase hex, e.g. 0x0A."""
    return f"0x{suffix:02X}"


def format_node_number(node_id: int) -> str:
    """Node number as unsigned 32-bit decimal."""
    return str(node_id & _NODE_NUMBER_MASK)


def short_display_name(node: Node, config: RelayConfig = DEFAULT_RELAY_CONFIG) -> str:
    name = node.short_name.strip()
    return name or config.unknown_short_name


def long_display_name(node: Node, config: RelayConfig = DEFAULT_RELAY_CONFIG) -> str:
    name = node.long_name.strip()
    return name or short_display_name(node, config)


def render_relay_text(
    attribution: RelayAttribution,
    config: RelayConfig = DEFAULT_RELAY_CONFIG,
) -> str:
    """Render the last-relay value shown for a node.

    Unambiguous -> "Long Name (0x01)"
    Ambiguous   -> "B, A (0x01)" in resolver order
    none        -> "0x01"
    """
    hex_byte = format_suffix_hex(attribution.suffix)
    resolution = attribution.resolution

    if isinstance(resolution, Unambiguous):
        return f"{long_display_name(resolution.node, config)} ({hex_byte})"
    if isinstance(resolution, Ambiguous):
        names = ", ".join(
            short_display_name(node, config) for node in resolution.candidates
        )
        return f"{names} ({hex_byte})"
    if isinstance(resolution, NoAttribution):
        return hex_byte
    raise TypeError(f"Unknown resolution: {resolution!r}")


def render_hop_text(hops_away: int, hop_start: int) -> str:
    if hop_start > 0:
        return f"{hops_away} of {hop_start} hops"
    return f"{hops_away} hops"


def format_uptime(seconds: int) -> str:
    """Compact uptime, e.g. 1d 2h 3m; seconds only below one minute."""
    days, remainder = divmod(max(0, seconds), 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, secs = divmod(remainder, 60)
    if days:
        return f"{days}d {hours}h {minutes}m"
    if hours:
        return f"{hours}h {minutes}m"
    if minutes:
        return f"{minutes}m"
    return f"{secs}s"
