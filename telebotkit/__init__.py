"""Building blocks for Telegram bots: API types, keyboards, send options, update routing, pollers, middleware and config access."""

__version__ = "0.1.0"