"""Stream Vibe: media identifier resolution behind a two-tier cache."""

__version__ = "0.1.0"
