"""Chess rules engine with a two-player console front end."""

__version__ = "0.1.0"
