"""Pet Game: a virtual pet that hatches, grows old and needs looking after."""

__version__ = "0.1.0"
