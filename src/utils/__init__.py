"""
Utility modules for the catalogue service
"""
from .config_loader import CatalogConfig, load_catalog_config
from .timestamps import format_now, format_timestamp

__all__ = [
    'CatalogConfig',
    'load_catalog_config',
    'format_now',
    'format_timestamp',
]
