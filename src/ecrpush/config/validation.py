"""Profile validation."""

import re

from ecrpush.config.models import Profile
from ecrpush.exceptions import ValidationError

ACCOUNT_ID_PATTERN = re.compile(r"\d{12}", re.ASCII)


def validate_profile(profile: Profile) -> Profile:
    """
    Validate the fields a push needs, stopping at the first failure.

    Checks run in order: region, account id presence, account id format,
    repository, image name.

    Parameters
    ----------
    profile : Profile
        Selected profile.

    Returns
    -------
    Profile
        The same profile, unchanged.

    Raises
    ------
    ValidationError
        Naming the first missing or invalid field.
    """
    if not profile.ecr.region:
        raise ValidationError("ecr.region is required")
    if not profile.ecr.account_id:
        raise ValidationError("ecr.account_id is required")
    if not ACCOUNT_ID_PATTERN.fullmatch(profile.ecr.account_id):
        raise ValidationError(
            f"ecr.account_id must be a 12-digit string, got '{profile.ecr.account_id}'"
        )
    if not profile.ecr.repository:
        raise ValidationError("ecr.repository is required")
    if not profile.docker.image_name:
        raise ValidationError("docker.image_name is required")
    return profile
