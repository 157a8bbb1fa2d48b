"""Dynadot IP updater."""

__version__ = "0.4.0"
