"""
Client configuration utilities.

Usage:
    from eyeson.config import load_client_config

    api_key, endpoint = load_client_config("default")
"""

from eyeson.config.loader import load_client_config, get_config_path

__all__ = ["load_client_config", "get_config_path"]
