"""Authenticate, build, tag and push steps against Amazon ECR."""

import logging
import shlex
import subprocess
from collections.abc import Callable

from ecrpush.config.models import Profile
from ecrpush.exceptions import (
    AuthenticationError,
    BuildError,
    PushError,
    StepError,
    TagError,
)
from ecrpush.lib.output import Colors, step

logger = logging.getLogger(__name__)

REGISTRY_USERNAME = "AWS"


def run_command(cmd: list[str], error_cls: type[StepError], message: str) -> None:
    """
    Run one external command with inherited stdout/stderr.

    Parameters
    ----------
    cmd : list of str
        Command and arguments.
    error_cls : type[StepError]
        Error type raised on failure.
    message : str
        Error message used on failure.

    Raises
    ------
    StepError
        Subclass given by ``error_cls`` if the process cannot be spawned or
        exits non-zero.
    """
    logger.debug("Executing: %s", shlex.join(cmd))

    try:
        result = subprocess.run(cmd, check=False)
    except OSError as e:
        raise error_cls(message, command=cmd) from e

    if result.returncode != 0:
        logger.debug("Command exited with status %d: %s", result.returncode, cmd[0])
        raise error_cls(message, command=cmd, returncode=result.returncode)


class RegistryOrchestrator:
    """
    Run the registry workflow for one validated profile.

    Steps run in a fixed order and the first failure stops the run.
    Nothing is retried or rolled back.

    Parameters
    ----------
    profile : Profile
        Validated profile to deploy.
    context : str, optional
        Docker build context directory, by default the working directory.
    """

    def __init__(self, profile: Profile, context: str = "."):
        self.profile = profile
        self.context = context

    def login_command(self) -> list[str]:
        """Shell pipeline that logs docker into the registry host."""
        region = shlex.quote(self.profile.ecr.region)
        host = shlex.quote(self.profile.registry_host)
        pipeline = (
            f"aws ecr get-login-password --region {region} | "
            f"docker login --username {REGISTRY_USERNAME} --password-stdin {host}"
        )
        return ["sh", "-c", pipeline]

    def build_command(self) -> list[str]:
        """Image build of the context, tagged with the bare image name.

        Docker applies its implicit ``latest`` tag.
        """
        return ["docker", "build", "-t", self.profile.docker.image_name, self.context]

    def tag_command(self) -> list[str]:
        """Tag mapping the local reference to the remote reference."""
        return ["docker", "tag", self.profile.local_reference, self.profile.remote_reference]

    def push_command(self) -> list[str]:
        """Push of the remote reference."""
        return ["docker", "push", self.profile.remote_reference]

    def authenticate(self) -> None:
        """Log docker into the registry host."""
        step("Authenticating Docker with ECR")
        run_command(self.login_command(), AuthenticationError, "error during ECR authentication")

    def build(self) -> None:
        """Build the image from the context directory."""
        step("Building container")
        run_command(self.build_command(), BuildError, "error building Docker image")

    def tag(self) -> None:
        """Tag the local image with its remote reference."""
        step("Tagging container", Colors.YELLOW)
        run_command(self.tag_command(), TagError, "error tagging Docker image")

    def push(self) -> None:
        """Push the remote reference to the registry."""
        step("Pushing container")
        run_command(self.push_command(), PushError, "error pushing Docker image")

    def steps(self) -> list[Callable[[], None]]:
        """
        Return the workflow steps in execution order.

        Returns
        -------
        list of callable
            authenticate, build, tag, push.
        """
        return [self.authenticate, self.build, self.tag, self.push]

    def run(self) -> None:
        """
        Execute every step in order, stopping at the first failure.

        Raises
        ------
        StepError
            AuthenticationError, BuildError, TagError or PushError from the
            step that failed.
        """
        for run_step in self.steps():
            run_step()
        logger.debug("Pushed %s", self.profile.remote_reference)
