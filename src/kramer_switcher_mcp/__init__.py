"""Kramer Protocol 2000 video switcher driver with an MCP server front end."""

__version__ = "0.1.0"
