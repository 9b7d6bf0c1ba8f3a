"""
Configuration management for the HTTP signature library
"""

from .signer_config import (
    SignerConfig,
    load_config_from_env,
    load_config_from_json,
    load_config_from_file,
)

__all__ = [
    'SignerConfig',
    'load_config_from_env',
    'load_config_from_json',
    'load_config_from_file',
]
