"""
Catalog bot: Telegram "/add" commands -> JSON catalog -> read-only HTTP API.
"""

__version__ = "1.0.0"
