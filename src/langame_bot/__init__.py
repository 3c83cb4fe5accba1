"""Telegram bot that reboots Langame club PCs on command."""

__version__ = "0.1.0"
