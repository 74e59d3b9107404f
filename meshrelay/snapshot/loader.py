"""Node snapshot loading from JSON or YAML files."""

from dataclasses import dataclass
import json
import logging
import math
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from ..relay.candidates import relay_suffix_of, validate_suffix
from ..relay.types import Node, NodeSnapshot

log = logging.getLogger(__name__)

_NODE_NUMBER_MAX = 0xFFFFFFFF
_SIGNED_MIN = -(1 << 31)
_YAML_SUFFIXES = {".yaml", ".yml"}


class SnapshotFormatError(ValueError):
    """Snapshot file is unreadable or has the wrong shape."""


class InvalidNodeIdError(ValueError):
    """Node identifier cannot be parsed into a 32-bit node number."""


@dataclass(frozen=True)
class LoadedSnapshot:
    """Parsed snapshot file."""

    nodes: NodeSnapshot
    owner_id: int | None
    skipped: int = 0


def parse_node_id(value: Any) -> int:
    """Parse a node number from an int, "0x..." hex, "!hex" user id or decimal.

    Negative integers are read as the signed form of a 32-bit number.
    """
    if isinstance(value, bool):
        raise InvalidNodeIdError(f"Invalid node id: {value!r}")

    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            if text.startswith("!"):
                number = int(text[1:], 16)
            elif text.lower().startswith("0x"):
                number = int(text, 16)
            else:
                number = int(text, 10)
        except ValueError as exc:
            raise InvalidNodeIdError(f"Invalid node id: {value!r}") from exc
    else:
        raise InvalidNodeIdError(f"Invalid node id: {value!r}")

    if _SIGNED_MIN <= number < 0:
        number &= _NODE_NUMBER_MAX
    if number < 0 or number > _NODE_NUMBER_MAX:
        raise InvalidNodeIdError(f"Node id out of 32-bit range: {value!r}")
    return number


def _number(raw: dict, key: str, default: float) -> float:
    value = raw.get(key)
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def _integer(raw: dict, key: str) -> int:
    """Read an integer field; fractions round up so 0.5 still counts as heard."""
    value = raw.get(key)
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        raise ValueError(f"Non-finite {key}: {value!r}")
    return math.ceil(number)


def _text(raw: dict, key: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str):
        return ""
    return value.strip()


def _relay_suffix(raw: dict) -> int | None:
    if raw.get("relay_suffix") is not None:
        return validate_suffix(raw["relay_suffix"])
    if raw.get("relay_node") is not None:
        return relay_suffix_of(parse_node_id(raw["relay_node"]))
    return None


def parse_node(raw: dict) -> Node:
    """Build a Node from one snapshot entry.

    Missing or non-finite signal fields default to 0.0. Raises
    InvalidNodeIdError when no usable node number is present,
    InvalidSuffixError for a bad relay_suffix and ValueError for a
    non-finite integer field.
    """
    for key in ("num", "node_id", "id"):
        if raw.get(key) is not None:
            node_id = parse_node_id(raw[key])
            break
    else:
        raise InvalidNodeIdError("Node entry has no num/node_id/id")

    return Node(
        node_id=node_id,
        short_name=_text(raw, "short_name"),
        long_name=_text(raw, "long_name"),
        last_heard=_integer(raw, "last_heard"),
        snr=_number(raw, "snr", 0.0),
        rssi=_number(raw, "rssi", 0.0),
        hops_away=_integer(raw, "hops_away"),
        hop_start=_integer(raw, "hop_start"),
        relay_suffix=_relay_suffix(raw),
        user_id=_text(raw, "user_id"),
        role=_text(raw, "role"),
        uptime_seconds=_integer(raw, "uptime_seconds"),
        mismatch_key=raw.get("mismatch_key") is True,
    )


def build_snapshot(data: Any) -> LoadedSnapshot:
    """Validate decoded snapshot data and index nodes by number."""
    if not isinstance(data, dict):
        raise SnapshotFormatError("Snapshot must be a mapping with a 'nodes' list")

    entries = data.get("nodes")
    if not isinstance(entries, list):
        raise SnapshotFormatError("Snapshot must be a mapping with a 'nodes' list")

    owner_raw = data.get("owner")
    owner_id = parse_node_id(owner_raw) if owner_raw is not None else None

    nodes: dict[int, Node] = {}
    skipped = 0
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            log.warning(f"Skipping snapshot entry {index}: not a mapping")
            skipped += 1
            continue
        try:
            node = parse_node(entry)
        except ValueError as e:
            log.warning(f"Skipping snapshot entry {index}: {e}")
            skipped += 1
            continue
        nodes[node.node_id] = node

    return LoadedSnapshot(
        nodes=MappingProxyType(nodes), owner_id=owner_id, skipped=skipped
    )


def load_snapshot(path: str | Path) -> LoadedSnapshot:
    """Read a snapshot file; .yaml/.yml are parsed as YAML, anything else as JSON."""
    snapshot_path = Path(path)
    try:
        text = snapshot_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotFormatError(f"Cannot read snapshot {snapshot_path}: {exc}") from exc

    try:
        if snapshot_path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SnapshotFormatError(f"Cannot parse snapshot {snapshot_path}: {exc}") from exc

    snapshot = build_snapshot(data)
    log.info(
        f"Loaded snapshot {snapshot_path}: nodes={len(snapshot.nodes)} skipped={snapshot.skipped}"
    )
    return snapshot
