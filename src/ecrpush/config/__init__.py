"""Deploy file loading and profile validation."""

from .loader import DEFAULT_PROFILE, load_config
from .models import Configuration, ImageSource, Profile, RegistryTarget
from .validation import validate_profile

__all__ = [
    "DEFAULT_PROFILE",
    "Configuration",
    "ImageSource",
    "Profile",
    "RegistryTarget",
    "load_config",
    "validate_profile",
]
