"""conveyord - REST API daemon for the conveyor project registry."""

__version__ = "0.1.0"
