"""Registrar provider implementations."""

from dynadot_updater.providers.base import RegistrarProvider
from dynadot_updater.providers.dynadot import DynadotProvider

__all__ = ["RegistrarProvider", "DynadotProvider"]
