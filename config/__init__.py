"""
Config module - Default settings and service identifiers.
"""

from .settings import DEFAULT_SETTINGS, IMPORTER_ID, SERVICE_ID

__all__ = [
    'DEFAULT_SETTINGS',
    'IMPORTER_ID',
    'SERVICE_ID',
]
