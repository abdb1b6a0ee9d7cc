"""
Configuration schemas for the consent administration module.
"""

from .consent_admin_config import AuthSourceConfig, ConsentAdminConfig, MetadataConfig, StoreBackend, StoreConfig

__all__ = [
    "ConsentAdminConfig",
    "AuthSourceConfig",
    "MetadataConfig",
    "StoreBackend",
    "StoreConfig",
]
