"""Player identity resolution and statistics aggregation for league cricket."""

__version__ = "0.1.0"
