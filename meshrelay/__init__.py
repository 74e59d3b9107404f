"""meshrelay - relay attribution for truncated mesh relay identifiers."""

__version__ = "0.1.0"
