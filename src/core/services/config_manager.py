"""
config_manager.py
-----------------
Configuration file loader for runtime and loading screen settings.

Features:
- Supports .json and .yaml/.yml config files
- Recursively merges loaded values over defaults
- Ignores '_notes' keys for human-readable configs
"""

import copy
import json
import os

import yaml

from src.core.debug.debug_logger import DebugLogger


YAML_EXTENSIONS = (".yaml", ".yml")


# ===========================================================
# Public API
# ===========================================================

def load_config(filename, default_dict=None, strict=False):
    """
    Load a configuration file.

    Args:
        filename: Path to a .json or .yaml file
        default_dict: Default fallback config
        strict: If True, raise exception on missing file

    Returns:
        dict: Merged configuration
    """
    if default_dict is None:
        default_dict = {}

    try:
        data = _load_file(filename)
        if not isinstance(data, dict):
            DebugLogger.warn(f"Ignoring {filename}: top level is not a mapping", category="loading")
            return copy.deepcopy(default_dict)
        return merge_dicts(default_dict, data)

    except FileNotFoundError as e:
        if strict:
            raise FileNotFoundError(f"Config not found: {filename}") from e
        DebugLogger.warn(f"Config {filename} not found - using defaults", category="loading")
        return copy.deepcopy(default_dict)

    except (json.JSONDecodeError, yaml.YAMLError, OSError) as e:
        if strict:
            raise
        DebugLogger.warn(f"Failed to load {filename}: {e} - using defaults", category="loading")
        return copy.deepcopy(default_dict)


def save_config(filename, data):
    """
    Write a config dict to disk, format picked from the file extension.

    Args:
        filename: Target .json or .yaml path
        data: Mapping to write
    """
    with open(filename, "w", encoding="utf-8") as f:
        if filename.endswith(YAML_EXTENSIONS):
            yaml.safe_dump(data, f, sort_keys=False)
        else:
            json.dump(data, f, indent=2)
    DebugLogger.system(f"Saved {os.path.basename(filename)}", category="loading")


# ===========================================================
# File Loaders
# ===========================================================

def _load_file(path):
    """Dispatch on extension."""
    with open(path, "r", encoding="utf-8") as f:
        if path.endswith(YAML_EXTENSIONS):
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)
    DebugLogger.system(f"Loaded {os.path.basename(path)}", category="loading")
    return data


# ===========================================================
# Merge Utilities
# ===========================================================

def merge_dicts(default, override):
    """Recursively merge two dicts. Ignores '_notes' keys."""
    merged = copy.deepcopy(default)
    for key, value in override.items():
        if key == "_notes":
            continue
        if isinstance(value, dict) and key in merged and isinstance(merged[key], dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
