"""Unit tests for the registry workflow."""

from dataclasses import replace
from unittest.mock import Mock, call

import pytest

from ecrpush.exceptions import AuthenticationError, BuildError, PushError, TagError
from ecrpush.registry.orchestrator import RegistryOrchestrator, run_command

LOGIN_PIPELINE = (
    "aws ecr get-login-password --region us-east-1 | "
    "docker login --username AWS --password-stdin "
    "123456789012.dkr.ecr.us-east-1.amazonaws.com"
)
REMOTE = "123456789012.dkr.ecr.us-east-1.amazonaws.com/myrepo:latest"


@pytest.mark.unit
class TestCommands:
    """Tests for the command lines of each step."""

    def test_login_command(self, dev_profile):
        assert RegistryOrchestrator(dev_profile).login_command() == ["sh", "-c", LOGIN_PIPELINE]

    def test_build_command_uses_bare_image_name(self, dev_profile):
        assert RegistryOrchestrator(dev_profile).build_command() == [
            "docker",
            "build",
            "-t",
            "myapp",
            ".",
        ]

    def test_build_command_context(self, dev_profile):
        orchestrator = RegistryOrchestrator(dev_profile, context="/src/app")
        assert orchestrator.build_command()[-1] == "/src/app"

    def test_tag_command(self, dev_profile):
        assert RegistryOrchestrator(dev_profile).tag_command() == [
            "docker",
            "tag",
            "myapp:latest",
            REMOTE,
        ]

    def test_push_command(self, dev_profile):
        assert RegistryOrchestrator(dev_profile).push_command() == ["docker", "push", REMOTE]


@pytest.mark.unit
class TestRunCommand:
    """Tests for run_command()."""

    def test_success(self, mock_subprocess):
        run_command(["docker", "version"], BuildError, "boom")

        mock_subprocess.assert_called_once_with(["docker", "version"], check=False)

    def test_non_zero_exit(self, mock_subprocess):
        mock_subprocess.return_value = Mock(returncode=125)

        with pytest.raises(BuildError) as exc_info:
            run_command(["docker", "build", "."], BuildError, "error building Docker image")

        err = exc_info.value
        assert err.returncode == 125
        assert err.command == ["docker", "build", "."]
        assert str(err) == "error building Docker image (exit_code=125)"

    def test_spawn_failure_wraps_cause(self, mock_subprocess):
        mock_subprocess.side_effect = FileNotFoundError(2, "No such file or directory", "docker")

        with pytest.raises(PushError) as exc_info:
            run_command(["docker", "push", REMOTE], PushError, "error pushing Docker image")

        err = exc_info.value
        assert err.returncode is None
        assert isinstance(err.__cause__, FileNotFoundError)
        assert str(err).startswith("error pushing Docker image: ")
        assert "No such file or directory" in str(err)


@pytest.mark.unit
class TestRegistryOrchestrator:
    """Tests for RegistryOrchestrator.run()."""

    def test_runs_steps_in_order(self, dev_profile, mock_subprocess, capsys):
        RegistryOrchestrator(dev_profile).run()

        assert mock_subprocess.call_args_list == [
            call(["sh", "-c", LOGIN_PIPELINE], check=False),
            call(["docker", "build", "-t", "myapp", "."], check=False),
            call(["docker", "tag", "myapp:latest", REMOTE], check=False),
            call(["docker", "push", REMOTE], check=False),
        ]
        out = capsys.readouterr().out
        assert out.index("Authenticating Docker with ECR") < out.index("Building container")
        assert out.index("Building container") < out.index("Tagging container")
        assert out.index("Tagging container") < out.index("Pushing container")

    def test_steps_order(self, dev_profile):
        orchestrator = RegistryOrchestrator(dev_profile)
        names = [s.__name__ for s in orchestrator.steps()]
        assert names == ["authenticate", "build", "tag", "push"]

    def test_tag_failure_stops_before_push(self, dev_profile, mock_subprocess):
        mock_subprocess.side_effect = [
            Mock(returncode=0),
            Mock(returncode=0),
            Mock(returncode=1),
        ]

        with pytest.raises(TagError):
            RegistryOrchestrator(dev_profile).run()

        assert mock_subprocess.call_count == 3
        executed = [c.args[0] for c in mock_subprocess.call_args_list]
        assert executed[0][0] == "sh"
        assert executed[1][:2] == ["docker", "build"]
        assert ["docker", "push", REMOTE] not in executed

    def test_authentication_failure_stops_everything(self, dev_profile, mock_subprocess):
        mock_subprocess.return_value = Mock(returncode=1)

        with pytest.raises(AuthenticationError, match="error during ECR authentication"):
            RegistryOrchestrator(dev_profile).run()

        assert mock_subprocess.call_count == 1

    def test_build_spawn_failure(self, dev_profile, mock_subprocess):
        mock_subprocess.side_effect = [Mock(returncode=0), PermissionError("denied")]

        with pytest.raises(BuildError, match="error building Docker image: denied"):
            RegistryOrchestrator(dev_profile).run()

        assert mock_subprocess.call_count == 2

    def test_push_failure(self, dev_profile, mock_subprocess):
        mock_subprocess.side_effect = [Mock(returncode=0)] * 3 + [Mock(returncode=1)]

        with pytest.raises(PushError) as exc_info:
            RegistryOrchestrator(dev_profile).run()

        assert exc_info.value.command == ["docker", "push", REMOTE]

    def test_login_arguments_are_shell_quoted(self, dev_profile, mock_subprocess):
        profile = replace(dev_profile, ecr=replace(dev_profile.ecr, region="us-east-1; rm -rf /"))
        pipeline = RegistryOrchestrator(profile).login_command()[2]

        assert "--region 'us-east-1; rm -rf /' |" in pipeline
