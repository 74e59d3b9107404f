"""CLI for meshrelay."""

from dataclasses import replace
import json
import logging
import os
from pathlib import Path

import click

from .relay.config import config_from_env
from .relay.pipeline import node_details_lines, node_details_structured, relay_structured
from .relay.types import InvalidSuffixError
from .snapshot.loader import (
    InvalidNodeIdError,
    LoadedSnapshot,
    SnapshotFormatError,
    load_snapshot,
    parse_node_id,
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """meshrelay - Attribute truncated relay ids to known mesh nodes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(snapshot_path: Path) -> LoadedSnapshot:
    try:
        return load_snapshot(snapshot_path)
    except (SnapshotFormatError, InvalidNodeIdError) as exc:
        raise SystemExit(str(exc)) from exc


def _owner(snapshot: LoadedSnapshot, owner: str | None) -> int | None:
    raw = owner or os.environ.get("MESHRELAY_OWNER")
    if not raw:
        return snapshot.owner_id
    try:
        return parse_node_id(raw)
    except InvalidNodeIdError as exc:
        raise SystemExit(str(exc)) from exc


def _parse_suffix(raw: str) -> int:
    text = raw.strip()
    try:
        return int(text, 16) if text.lower().startswith("0x") else int(text, 10)
    except ValueError as exc:
        raise SystemExit(f"Invalid relay suffix: {raw!r}") from exc


@cli.command()
@click.argument("snapshot_path", type=click.Path(exists=True, path_type=Path))
@click.option("--suffix", "-s", required=True, help="Relay suffix byte, e.g. 0x01 or 1")
@click.option("--owner", default=None, help="Owner node id (overrides snapshot owner)")
@click.option("--json", "as_json", is_flag=True, help="Print structured JSON payload")
def resolve(snapshot_path: Path, suffix: str, owner: str | None, as_json: bool):
    """Resolve a relay suffix against a node snapshot."""
    snapshot = _load(snapshot_path)
    owner_id = _owner(snapshot, owner)
    config = config_from_env()

    try:
        payload = relay_structured(
            snapshot.nodes, owner_id, _parse_suffix(suffix), config=config
        )
    except InvalidSuffixError as exc:
        raise SystemExit(str(exc)) from exc

    if as_json:
        click.echo(json.dumps(payload, indent=2))
        return

    relay = payload["relay"]
    click.echo(relay["text"])
    if relay["resolution"] == "Ambiguous":
        click.echo(f"\nCandidates ({len(relay['candidates'])}):")
        for candidate in relay["candidates"]:
            click.echo(
                f"  [{candidate['score']:.1f}] {candidate['short_name'] or config.unknown_short_name} "
                f"({candidate['node_id']:#010x})"
            )


@cli.command()
@click.argument("snapshot_path", type=click.Path(exists=True, path_type=Path))
@click.argument("node_ref", type=str)
@click.option("--owner", default=None, help="Owner node id (overrides snapshot owner)")
@click.option(
    "--show-relay/--hide-relay",
    default=None,
    help="Show last relay and hops (default from MESHRELAY_SHOW_RELAY_INFO)",
)
@click.option("--json", "as_json", is_flag=True, help="Print structured JSON payload")
def inspect(
    snapshot_path: Path,
    node_ref: str,
    owner: str | None,
    show_relay: bool | None,
    as_json: bool,
):
    """Show detail lines for one node in a snapshot."""
    snapshot = _load(snapshot_path)
    owner_id = _owner(snapshot, owner)
    config = config_from_env()
    if show_relay is not None:
        config = replace(config, show_relay_info=show_relay)

    try:
        node_id = parse_node_id(node_ref)
    except InvalidNodeIdError as exc:
        raise SystemExit(str(exc)) from exc

    node = snapshot.nodes.get(node_id)
    if node is None:
        click.echo(f"Node not found: {node_ref}")
        raise SystemExit(1)

    if as_json:
        payload = node_details_structured(node, snapshot.nodes, owner_id, config=config)
        click.echo(json.dumps(payload, indent=2))
        return

    for line in node_details_lines(node, snapshot.nodes, owner_id, config=config):
        click.echo(line)


if __name__ == "__main__":
    cli()
