"""Cricket roster service: team data, player records and player submissions."""

__version__ = "0.1.0"
