"""SLClient: a MUD client with an auto-mapper."""

__version__ = "0.1.0"
