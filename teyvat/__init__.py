"""Building blocks for a small role-playing game server: framed TCP messaging, routing, CSV game tables and player modules."""

__version__ = "0.1.0"