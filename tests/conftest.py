"""Pytest configuration and shared fixtures."""

import logging
from unittest.mock import Mock

import pytest

from ecrpush.config.models import ImageSource, Profile, RegistryTarget
from ecrpush.lib import output


DEPLOY_YAML = """\
profiles:
  dev:
    ecr:
      region: us-east-1
      account_id: "123456789012"
      repository: myrepo
      image_tag: latest
    docker:
      image_name: myapp
  prod:
    ecr:
      region: eu-west-1
      account_id: "210987654321"
      repository: myrepo-prod
      image_tag: v1.2.0
    docker:
      image_name: myapp
"""


@pytest.fixture(autouse=True)
def plain_output():
    """Disable ANSI colours so assertions match plain text."""
    output.set_color_enabled(False)
    yield
    output.set_color_enabled(None)


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers bound to a previous test's captured streams."""
    yield
    logging.getLogger("ecrpush").handlers.clear()


@pytest.fixture
def write_config(tmp_path):
    """Write YAML text to a deploy file and return its path.

    Returns
    -------
    callable
        ``write_config(text, name="deploy.yml") -> Path``
    """

    def _write(text: str, name: str = "deploy.yml"):
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def deploy_file(write_config):
    """Deploy file with complete ``dev`` and ``prod`` profiles."""
    return write_config(DEPLOY_YAML)


@pytest.fixture
def dev_profile():
    """Validated profile matching the ``dev`` entry of DEPLOY_YAML."""
    return Profile(
        name="dev",
        ecr=RegistryTarget(
            region="us-east-1",
            account_id="123456789012",
            repository="myrepo",
            image_tag="latest",
        ),
        docker=ImageSource(image_name="myapp"),
    )


@pytest.fixture
def mock_subprocess(monkeypatch):
    """Mock subprocess.run as seen by the orchestrator.

    Returns
    -------
    Mock
        Mock returning a zero exit status by default.
    """
    mock_run = Mock()
    mock_run.return_value = Mock(returncode=0)
    monkeypatch.setattr("ecrpush.registry.orchestrator.subprocess.run", mock_run)
    return mock_run
