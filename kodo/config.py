#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

import toml
import yaml

from .exit_codes import ConfigError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("kodo")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. KODO_CONFIG environment variable
    2. ~/.kodo/ directory
    """
    # Check for environment variable override
    if 'KODO_CONFIG' in os.environ:
        path = Path(os.environ['KODO_CONFIG']).expanduser()
        if path.exists():
            return path
        logger.debug(f"KODO_CONFIG points at missing file {path}")

    kodo_dir = Path.home() / '.kodo'
    for filename in CONFIG_FILENAMES:
        path = kodo_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path for saving
    return kodo_dir / 'config.json'


def _read_config_file(config_path):
    suffix = config_path.suffix.lower()
    if suffix == '.toml':
        with open(config_path, 'rb') as f:
            return tomllib.load(f)
    if suffix in ('.yaml', '.yml'):
        with open(config_path, 'r') as f:
            return yaml.safe_load(f) or {}
    with open(config_path, 'r') as f:
        return json.load(f)


def load_config(strict=False):
    """Load configuration from file.

    Args:
        strict: Raise ConfigError for an unreadable file instead of
            logging it and falling back to defaults
    """
    config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    # Load from file if it exists
    if config_path.exists():
        try:
            file_config = _read_config_file(config_path)
            if not isinstance(file_config, dict):
                raise ValueError("top level must be a mapping")

            # Merge file config with defaults
            config = merge_configs(config, file_config)
        except Exception as e:
            if strict:
                raise ConfigError(f"Error loading config from {config_path}: {e}") from e
            logger.error(f"Error loading config from {config_path}: {e}")

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    return config


def save_config(config):
    """Save configuration to file."""
    config_path = get_config_path()

    try:
        # Create directory if it doesn't exist
        config_path.parent.mkdir(parents=True, exist_ok=True)

        if config_path.suffix.lower() == '.toml':
            with open(config_path, 'w') as f:
                toml.dump(config, f)
        elif config_path.suffix.lower() in ['.yaml', '.yml']:
            with open(config_path, 'w') as f:
                yaml.safe_dump(config, f, default_flow_style=False)
        else:
            # Default to JSON format
            with open(config_path, 'w') as f:
                json.dump(config, f, indent=2)

        logger.info(f"Configuration saved to {config_path}")
    except Exception as e:
        logger.error(f"Error saving config to {config_path}: {e}")


def get_default_config():
    """Get default configuration."""
    return {
        "data_file": "activities.json",
        "repository": ".",
        "dashboard": {
            "poll_interval": 0.1,
            "commit_limit": 50,
            "keys": {
                "quit": "q",
                "add": "a",
                "delete": "d",
                "edit": "e",
                "filter": "f",
                "reset": "r",
                "sort": "s",
                "stats": "t",
                "sync": "g",
                "up": ["up", "k"],
                "down": ["down", "j"],
            }
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s",
            "file": ""
        }
    }


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            merged[key] = merge_configs(merged[key], value)
        else:
            # Override or add new key
            merged[key] = value

    return merged


def _typed_env_value(value):
    if value.lower() in ('true', 'yes', 'on'):
        return True
    if value.lower() in ('false', 'no', 'off'):
        return False
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: KODO_SECTION_KEY
    For example: KODO_DASHBOARD_COMMIT_LIMIT=20 or KODO_DATA_FILE=~/work.json
    """
    env_prefix = "KODO_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix) or env_key == 'KODO_CONFIG':
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')
        typed_value = _typed_env_value(value)

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i : i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if matched_key is None:
                break

            # If we are at the end of the env var, we have found the key to set
            if i + best_match_len == len(key_parts):
                if isinstance(current_level[matched_key], str):
                    typed_value = value
                current_level[matched_key] = typed_value
                break

            # Otherwise, we descend into the dictionary
            if not isinstance(current_level[matched_key], dict):
                break
            current_level = current_level[matched_key]
            i += best_match_len

    return config


def configure_logging(config):
    """Apply the ``logging`` config section to the root logger."""
    section = config.get("logging", {})
    level_name = str(section.get("level", "INFO")).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        logger.warning(f"Unknown log level {level_name!r}, using INFO")
        level = logging.INFO

    handlers = [logging.StreamHandler(sys.stderr)]
    if section.get("file"):
        handlers.append(logging.FileHandler(Path(section["file"]).expanduser()))

    logging.basicConfig(
        level=level,
        format=section.get("format", "%(levelname)s: %(message)s"),
        handlers=handlers,
        force=True,
    )
