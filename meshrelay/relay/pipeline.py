"""Relay detail orchestration for a single inspected node."""

from dataclasses import asdict

from .config import DEFAULT_RELAY_CONFIG, RelayConfig
from .renderer import (
    format_node_number,
    format_suffix_hex,
    format_uptime,
    render_hop_text,
    render_relay_text,
    short_display_name,
)
from .resolver import resolve_node_relay, resolve_relay
from .scorer import signal_score
from .types import Node, NodeSnapshot, RelayAttribution


def _attribution_payload(
    attribution: RelayAttribution, config: RelayConfig
) -> dict:
    best = attribution.best
    return {
        "suffix": attribution.suffix,
        "suffix_hex": format_suffix_hex(attribution.suffix),
        "resolution": type(attribution.resolution).__name__,
        "best_node_id": best.node_id if best else None,
        "candidates": [
            {**asdict(node), "score": signal_score(node, config)}
            for node in attribution.candidates
        ],
        "text": render_relay_text(attribution, config),
    }


def relay_structured(
    snapshot: NodeSnapshot,
    owner_id: int | None,
    suffix: int,
    *,
    config: RelayConfig = DEFAULT_RELAY_CONFIG,
) -> dict:
    """Resolve a bare suffix and return a structured payload."""
    attribution = resolve_relay(snapshot, owner_id, suffix, config=config)
    return {
        "success": True,
        "owner_id": owner_id,
        "relay": _attribution_payload(attribution, config),
    }


def node_details_structured(
    node: Node,
    snapshot: NodeSnapshot,
    owner_id: int | None,
    *,
    config: RelayConfig = DEFAULT_RELAY_CONFIG,
) -> dict:
    """Detail payload for one node, including its last relay and hop count.

    Relay and hop entries are only present for relayed nodes and only when
    config.show_relay_info is set; directly heard nodes already imply a
    direct link through their own SNR/RSSI.
    """
    warnings: list[str] = []
    relay: dict | None = None
    hops: str | None = None

    if node.mismatch_key:
        warnings.append("public_key_mismatch")

    if config.show_relay_info and node.hops_away > 0:
        attribution = resolve_node_relay(node, snapshot, owner_id, config=config)
        if attribution is None:
            warnings.append("relay_suffix_missing")
        else:
            relay = _attribution_payload(attribution, config)
            hops = render_hop_text(node.hops_away, node.hop_start)

    return {
        "success": True,
        "node_id": node.node_id,
        "node_number": format_node_number(node.node_id),
        "short_name": short_display_name(node, config),
        "long_name": node.long_name,
        "user_id": node.user_id,
        "role": node.role,
        "last_heard": node.last_heard,
        "uptime": format_uptime(node.uptime_seconds) if node.uptime_seconds > 0 else None,
        "mismatch_key": node.mismatch_key,
        "relay": relay,
        "hops": hops,
        "warnings": warnings,
    }


def node_details_lines(
    node: Node,
    snapshot: NodeSnapshot,
    owner_id: int | None,
    *,
    config: RelayConfig = DEFAULT_RELAY_CONFIG,
) -> list[str]:
    """Render node details as label/value lines."""
    payload = node_details_structured(node, snapshot, owner_id, config=config)
    lines: list[str] = []
    if payload["mismatch_key"]:
        lines.append("Encryption Error: public key mismatch")
    lines += [
        f"Short Name: {payload['short_name']}",
        f"Node Number: {payload['node_number']}",
        f"User ID: {payload['user_id'] or '-'}",
        f"Role: {payload['role'] or '-'}",
        f"Last Heard: {payload['last_heard']}",
    ]
    if payload["uptime"] is not None:
        lines.append(f"Uptime: {payload['uptime']}")
    if payload["relay"] is not None:
        lines.append(f"Last Relay: {payload['relay']['text']}")
        lines.append(f"Hops: {payload['hops']}")
    return lines
