"""Configuration records decoded from the deploy file."""

from dataclasses import asdict, dataclass, field

from ecrpush.exceptions import ProfileNotFoundError


@dataclass(frozen=True)
class RegistryTarget:
    """Remote ECR repository settings (``ecr`` section of a profile)."""

    region: str = ""
    account_id: str = ""
    repository: str = ""
    image_tag: str = ""


@dataclass(frozen=True)
class ImageSource:
    """Local image settings (``docker`` section of a profile)."""

    image_name: str = ""


@dataclass(frozen=True)
class Profile:
    """
    Named bundle of registry and image settings.

    Attributes
    ----------
    name : str
        Profile name as it appears under ``profiles``.
    ecr : RegistryTarget
        Registry target settings.
    docker : ImageSource
        Local image settings.
    """

    name: str
    ecr: RegistryTarget = field(default_factory=RegistryTarget)
    docker: ImageSource = field(default_factory=ImageSource)

    @property
    def registry_host(self) -> str:
        """Registry endpoint, e.g. ``123456789012.dkr.ecr.us-east-1.amazonaws.com``."""
        return f"{self.ecr.account_id}.dkr.ecr.{self.ecr.region}.amazonaws.com"

    @property
    def local_reference(self) -> str:
        """Local image reference, ``<image_name>:<image_tag>``."""
        return f"{self.docker.image_name}:{self.ecr.image_tag}"

    @property
    def remote_reference(self) -> str:
        """Remote image reference, ``<registry_host>/<repository>:<image_tag>``."""
        return f"{self.registry_host}/{self.ecr.repository}:{self.ecr.image_tag}"

    def to_dict(self) -> dict:
        """Return the ``ecr``/``docker`` sections as plain nested dicts."""
        return {"ecr": asdict(self.ecr), "docker": asdict(self.docker)}


@dataclass(frozen=True)
class Configuration:
    """Mapping of profile name to Profile, loaded once per run."""

    profiles: dict[str, Profile] = field(default_factory=dict)

    def get_profile(self, name: str) -> Profile:
        """
        Select a profile by name, ignoring case.

        Loaded profile names are lower-case, so the lookup key is lowered too.

        Parameters
        ----------
        name : str
            Profile name, e.g. ``dev`` or ``Prod``.

        Returns
        -------
        Profile
            The selected profile.

        Raises
        ------
        ProfileNotFoundError
            If no profile with that name was loaded.
        """
        try:
            return self.profiles[name.lower()]
        except KeyError:
            raise ProfileNotFoundError(name) from None
