"""Tests for node snapshot loading."""

from pathlib import Path
import json

import pytest

from meshrelay.relay.resolver import resolve_relay
from meshrelay.relay.types import Ambiguous
from meshrelay.snapshot.loader import (
    InvalidNodeIdError,
    SnapshotFormatError,
    build_snapshot,
    load_snapshot,
    parse_node,
    parse_node_id,
)

YAML_SNAPSHOT = """\
owner: "!00003000"
nodes:
  - num: 0x1001
    short_name: A_short
    long_name: Alpha
    last_heard: 100
    snr: 5
    rssi: -60
  - num: 0x2001
    short_name: B_short
    long_name: Bravo
    last_heard: 100
    snr: 2
    rssi: -50
  - num: 0x4444
    short_name: TGT
    last_heard: 200
    hops_away: 3
    hop_start: 5
    relay_node: 0xABCD2001
"""


class TestParseNodeId:
    def test_accepts_int_hex_user_id_and_decimal(self):
        assert parse_node_id(4097) == 0x1001
        assert parse_node_id("0x1001") == 0x1001
        assert parse_node_id("!00001001") == 0x1001
        assert parse_node_id("4097") == 0x1001

    def test_signed_ints_map_to_unsigned(self):
        assert parse_node_id(-1) == 0xFFFFFFFF

    @pytest.mark.parametrize("value", ["", "!zz", "abc", True, 1 << 32, 3.5, None])
    def test_rejects_garbage(self, value):
        with pytest.raises(InvalidNodeIdError):
            parse_node_id(value)


def test_parse_node_defaults_missing_signal_to_zero():
    node = parse_node({"id": "!00001001", "last_heard": 5})

    assert node.node_id == 0x1001
    assert node.snr == 0.0
    assert node.rssi == 0.0
    assert node.relay_suffix is None
    assert node.short_name == ""


def test_parse_node_masks_relay_node_to_suffix():
    node = parse_node({"num": 1, "hops_away": 1, "relay_node": 0xDEADBEEF})

    assert node.relay_suffix == 0xEF


def test_parse_node_rejects_bad_relay_suffix():
    with pytest.raises(ValueError):
        parse_node({"num": 1, "relay_suffix": 300})


def test_build_snapshot_skips_malformed_entries():
    snapshot = build_snapshot(
        {
            "nodes": [
                {"num": 1, "last_heard": 1},
                {"short_name": "no id"},
                "not a node",
                {"num": 2, "relay_suffix": -4},
            ]
        }
    )

    assert list(snapshot.nodes) == [1]
    assert snapshot.skipped == 3
    assert snapshot.owner_id is None


def test_build_snapshot_is_read_only():
    snapshot = build_snapshot({"nodes": [{"num": 1}]})

    with pytest.raises(TypeError):
        snapshot.nodes[2] = snapshot.nodes[1]  # type: ignore[index]


@pytest.mark.parametrize("data", [None, [], {"nodes": {}}, {"owner": 1}])
def test_build_snapshot_rejects_wrong_shape(data):
    with pytest.raises(SnapshotFormatError):
        build_snapshot(data)


def test_load_yaml_snapshot_and_resolve(tmp_path: Path):
    path = tmp_path / "nodes.yaml"
    path.write_text(YAML_SNAPSHOT, encoding="utf-8")

    snapshot = load_snapshot(path)

    assert snapshot.owner_id == 0x3000
    assert snapshot.nodes[0x4444].relay_suffix == 0x01

    target = snapshot.nodes[0x4444]
    attribution = resolve_relay(snapshot.nodes, snapshot.owner_id, target.relay_suffix)
    assert isinstance(attribution.resolution, Ambiguous)
    assert [n.short_name for n in attribution.candidates] == ["B_short", "A_short"]


def test_load_json_snapshot(tmp_path: Path):
    path = tmp_path / "nodes.json"
    path.write_text(
        json.dumps({"owner": 12288, "nodes": [{"num": 4097, "last_heard": 1}]}),
        encoding="utf-8",
    )

    snapshot = load_snapshot(path)

    assert snapshot.owner_id == 0x3000
    assert list(snapshot.nodes) == [0x1001]


def test_load_snapshot_parse_error(tmp_path: Path):
    path = tmp_path / "nodes.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SnapshotFormatError):
        load_snapshot(path)


def test_load_snapshot_missing_file(tmp_path: Path):
    with pytest.raises(SnapshotFormatError):
        load_snapshot(tmp_path / "missing.json")


def test_load_json_non_finite_signal_reads_as_zero(tmp_path: Path):
    path = tmp_path / "nodes.json"
    path.write_text(
        '{"nodes": [{"num": 257, "last_heard": 1, "snr": NaN, "rssi": -Infinity}]}',
        encoding="utf-8",
    )

    node = load_snapshot(path).nodes[0x101]

    assert node.snr == 0.0
    assert node.rssi == 0.0


def test_non_finite_integer_field_skips_entry(tmp_path: Path):
    path = tmp_path / "nodes.json"
    path.write_text(
        '{"nodes": [{"num": 1, "last_heard": 1e400}, {"num": 2, "last_heard": 1}]}',
        encoding="utf-8",
    )

    snapshot = load_snapshot(path)

    assert list(snapshot.nodes) == [2]
    assert snapshot.skipped == 1


def test_fractional_last_heard_rounds_up():
    node = parse_node({"num": 1, "last_heard": 0.5})

    assert node.last_heard == 1
    assert node.heard


def test_parse_node_reads_uptime_and_key_mismatch():
    node = parse_node({"num": 1, "uptime_seconds": 3726, "mismatch_key": True})
    plain = parse_node({"num": 2, "mismatch_key": "yes"})

    assert node.uptime_seconds == 3726
    assert node.mismatch_key is True
    assert plain.uptime_seconds == 0
    assert plain.mismatch_key is False
