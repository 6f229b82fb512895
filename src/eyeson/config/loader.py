"""
Account configuration for examples and scripts.

eyeson_config.yaml maps account names to an API key and an optional
endpoint:

    default:
      api_key: your-api-key
    staging:
      api_key: other-key
      endpoint: https://staging.example.com
"""

import logging
import os
from pathlib import Path
from typing import Any, Tuple

import yaml

from eyeson.client.rest import DEFAULT_ENDPOINT

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "eyeson_config.yaml"


def get_config_path() -> Path:
    """eyeson_config.yaml in the current working directory."""
    return Path(os.getcwd()) / CONFIG_FILENAME


def _read_accounts(path: Path) -> dict[str, Any]:
    try:
        with open(path, "r") as f:
            accounts = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise RuntimeError(f"Error loading client config from {path}: {e}") from e

    if accounts is None:
        return {}
    if not isinstance(accounts, dict):
        raise RuntimeError(
            f"Error loading client config from {path}: "
            f"expected a mapping of account names, got {type(accounts).__name__}"
        )
    return accounts


def load_client_config(
    account: str, config_path: Path | None = None
) -> Tuple[str, str]:
    """
    Look up an account's API key and endpoint.

    Args:
        account: Top-level key of the account in the config file
        config_path: File to read, defaults to get_config_path()

    Returns:
        Tuple of (api_key, endpoint). endpoint falls back to the public API.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the account is missing or has no usable api_key/endpoint
        RuntimeError: If the file can't be read or isn't a YAML mapping
    """
    path = config_path or get_config_path()
    if not path.exists():
        raise FileNotFoundError(
            f"{CONFIG_FILENAME} not found at {path}. "
            f"Start from {CONFIG_FILENAME}.example and fill in an api_key."
        )

    accounts = _read_accounts(path)
    entry = accounts.get(account)
    if not isinstance(entry, dict) or not entry:
        known = ", ".join(sorted(str(name) for name in accounts)) or "none"
        raise ValueError(
            f"Account '{account}' not found in {path} (configured accounts: {known})"
        )

    api_key = entry.get("api_key")
    if not api_key or not isinstance(api_key, str):
        raise ValueError(f"Missing required field api_key for account '{account}'")

    endpoint = entry.get("endpoint") or DEFAULT_ENDPOINT
    if not isinstance(endpoint, str) or not endpoint.startswith(("http://", "https://")):
        raise ValueError(
            f"Invalid endpoint for account '{account}': {endpoint!r} "
            "(expected an http:// or https:// URL)"
        )

    logger.debug(f"Loaded account '{account}' from {path} (endpoint {endpoint})")
    return api_key, endpoint
