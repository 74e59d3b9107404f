"""Configuration for relay attribution."""

from dataclasses import dataclass, replace
import os

RELAY_NODE_SUFFIX_MASK = 0xFF


@dataclass(frozen=True)
class RelayConfig:
    """Constants controlling relay scoring and rendering."""

    # SNR swings over roughly a third of RSSI's range, so weight it by 3.
    snr_weight: float = 3.0
    rssi_offset: float = 120.0

    unknown_short_name: str = "???"
    show_relay_info: bool = True


DEFAULT_RELAY_CONFIG = RelayConfig()


def _bool_env(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "off", "no"}


def config_from_env(base: RelayConfig = DEFAULT_RELAY_CONFIG) -> RelayConfig:
    """Apply MESHRELAY_* environment overrides to a config."""
    return replace(
        base,
        show_relay_info=_bool_env("MESHRELAY_SHOW_RELAY_INFO", base.show_relay_info),
    )
