"""Configuration loader for profile-based deploy files."""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from ecrpush.config.models import Configuration, ImageSource, Profile, RegistryTarget
from ecrpush.exceptions import ConfigParseError, ConfigReadError

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "dev"

# Defaults applied under profiles.dev only; other profiles get none.
DEV_DEFAULTS = {
    "ecr": {
        "region": "us-east-1",
        "image_tag": "latest",
    },
}

# Section -> field names recognised in that section (matched case-insensitively).
SECTION_FIELDS = {
    "ecr": ("region", "account_id", "repository", "image_tag"),
    "docker": ("image_name",),
}


def load_config(path: str | Path) -> Configuration:
    """
    Load a deploy file and decode it into a Configuration.

    Reads the YAML document, lower-cases profile names and keys,
    applies the ``dev`` profile defaults and decodes every profile into
    typed records.

    Parameters
    ----------
    path : str or Path
        Path to the YAML configuration file.

    Returns
    -------
    Configuration
        Decoded configuration keyed by profile name.

    Raises
    ------
    ConfigReadError
        If the file cannot be opened or is not valid YAML.
    ConfigParseError
        If the YAML does not match the ``profiles`` schema.
    """
    path = Path(path)
    document = _load_yaml_file(path)
    profiles = _normalize_profiles(document)
    profiles = _apply_defaults(profiles)

    config = Configuration(
        profiles={name: _decode_profile(name, body) for name, body in profiles.items()}
    )
    logger.debug("Loaded %s with profiles: %s", path, ", ".join(config.profiles) or "none")
    return config


def _load_yaml_file(path: Path) -> Any:
    """
    Read and parse a YAML file.

    Returns
    -------
    Any
        Parsed YAML content, or empty dict for an empty document.
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except OSError as e:
        raise ConfigReadError(f"Cannot read configuration file {path}") from e
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise ConfigReadError(f"Invalid YAML in {path}") from e

    return content if content is not None else {}


def _lower_keys(value: Any, where: str) -> dict:
    """Return a copy of a mapping with lower-cased string keys."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigParseError(f"'{where}' must be a mapping, got {type(value).__name__}")
    return {str(k).lower(): v for k, v in value.items()}


def _normalize_profiles(document: Any) -> dict[str, dict]:
    """
    Extract the ``profiles`` mapping with normalized section and field keys.

    Profile names and everything below them are lower-cased, so ``DEV``
    and ``dev`` are one profile and ``Account_ID`` and ``account_id`` one field.
    """
    top = _lower_keys(document, "<root>")
    raw_profiles = top.get("profiles")
    if raw_profiles is None:
        return {}
    if not isinstance(raw_profiles, dict):
        raise ConfigParseError(
            f"'profiles' must be a mapping, got {type(raw_profiles).__name__}"
        )

    profiles = {}
    for name, body in raw_profiles.items():
        name = str(name).lower()
        sections = _lower_keys(body, f"profiles.{name}")
        profiles[name] = {
            section: _lower_keys(sections.get(section), f"profiles.{name}.{section}")
            for section in SECTION_FIELDS
        }
    return profiles


def _apply_defaults(profiles: dict[str, dict]) -> dict[str, dict]:
    """
    Fill unset ``dev`` profile fields from DEV_DEFAULTS.

    A field is unset when it is missing or YAML ``null``. The ``dev`` profile
    is created when the file does not define it.
    """
    result = copy.deepcopy(profiles)
    dev = result.setdefault(DEFAULT_PROFILE, {section: {} for section in SECTION_FIELDS})

    for section, defaults in DEV_DEFAULTS.items():
        current = dev.setdefault(section, {})
        for key, value in defaults.items():
            if current.get(key) is None:
                current[key] = value

    return result


def _as_string(value: Any, where: str) -> str:
    """Coerce a scalar YAML value to str; reject nested structures."""
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ConfigParseError(f"'{where}' must be a string, got {type(value).__name__}")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _decode_profile(name: str, body: dict[str, dict]) -> Profile:
    """Decode one normalized profile mapping into a Profile."""
    values = {}
    for section, fields in SECTION_FIELDS.items():
        data = body.get(section, {})
        values[section] = {
            key: _as_string(data.get(key), f"profiles.{name}.{section}.{key}") for key in fields
        }

    return Profile(
        name=name,
        ecr=RegistryTarget(**values["ecr"]),
        docker=ImageSource(**values["docker"]),
    )
