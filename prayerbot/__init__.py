"""District prayer times bot for Telegram."""

__version__ = "1.0.0"
