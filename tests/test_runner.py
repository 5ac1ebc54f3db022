"""Tests for runtime/runner.py module."""

from unittest.mock import MagicMock, patch

import pytest

from vault_injector.exceptions import (
    AuthenticationError,
    ExecutableNotFoundError,
    MissingEnvironmentError,
    MissingSecretKeyError,
    NoEntrypointError,
    SecretNotFoundError,
)
from vault_injector.models import LaunchPlan
from vault_injector.runtime.runner import prepare_launch, run


@pytest.fixture
def vault_mocks():
    """Mock the Vault session and PATH lookup used by the runner."""
    with (
        patch("vault_injector.runtime.runner.login") as mock_login,
        patch("vault_injector.runtime.runner.read_secret") as mock_read,
        patch("vault_injector.runtime.runner.find_executable") as mock_find,
    ):
        mock_login.return_value = MagicMock()
        mock_read.return_value = {"data": {"AWS_SECRET_ACCESS_KEY": "abc"}, "metadata": {"version": 2}}
        mock_find.return_value = "/usr/local/bin/app"
        yield {"login": mock_login, "read": mock_read, "find": mock_find}


class TestPrepareLaunch:
    """Tests for everything that happens before the exec."""

    def test_successful_plan(self, vault_mocks, runtime_environ):
        """Test the plan for a complete environment."""
        plan = prepare_launch(["app", "--port", "8080"], runtime_environ, token_path="/tmp/token")

        assert plan == LaunchPlan(
            binary="/usr/local/bin/app",
            argv=("app", "--port", "8080"),
            environ={
                "PATH": "/usr/local/bin:/usr/bin:/bin",
                "AWS_SECRET_ACCESS_KEY": "abc",
                "LOG_LEVEL": "info",
            },
        )
        assert plan.environ == {
            "PATH": "/usr/local/bin:/usr/bin:/bin",
            "AWS_SECRET_ACCESS_KEY": "abc",
            "LOG_LEVEL": "info",
        }
        role, settings = vault_mocks["login"].call_args.args
        assert role == "some-role"
        assert settings.address == "https://vault.default.svc.cluster.local:8200"
        assert vault_mocks["login"].call_args.kwargs == {"token_path": "/tmp/token"}
        vault_mocks["read"].assert_called_once_with(vault_mocks["login"].return_value, "secret/data/some/path")
        vault_mocks["find"].assert_called_once_with("app")

    def test_flat_secret(self, vault_mocks, runtime_environ):
        """Test that a KV version 1 secret resolves the same way."""
        vault_mocks["read"].return_value = {"AWS_SECRET_ACCESS_KEY": "abc"}

        plan = prepare_launch(["app"], runtime_environ)

        assert plan.environ["AWS_SECRET_ACCESS_KEY"] == "abc"

    @pytest.mark.parametrize("variable", ["VAULT_ROLE", "VAULT_PATH"])
    def test_missing_variable_before_network(self, vault_mocks, runtime_environ, variable):
        """Test that missing settings abort before logging in."""
        del runtime_environ[variable]

        with pytest.raises(MissingEnvironmentError) as exc_info:
            prepare_launch(["app"], runtime_environ)

        assert exc_info.value.variable == variable
        vault_mocks["login"].assert_not_called()

    def test_authentication_failure(self, vault_mocks, runtime_environ):
        """Test that a failed login stops the flow."""
        vault_mocks["login"].side_effect = AuthenticationError("permission denied")

        with pytest.raises(AuthenticationError):
            prepare_launch(["app"], runtime_environ)

        vault_mocks["read"].assert_not_called()

    def test_secret_not_found(self, vault_mocks, runtime_environ):
        """Test that an absent secret stops the flow."""
        vault_mocks["read"].side_effect = SecretNotFoundError("secret/data/some/path")

        with pytest.raises(SecretNotFoundError):
            prepare_launch(["app"], runtime_environ)

        vault_mocks["find"].assert_not_called()

    def test_missing_key_never_launches(self, vault_mocks, runtime_environ):
        """Test that a dangling reference stops before the program is looked up."""
        runtime_environ["DB_PASSWORD"] = "vault:db"

        with pytest.raises(MissingSecretKeyError):
            prepare_launch(["app"], runtime_environ)

        vault_mocks["find"].assert_not_called()

    def test_no_command(self, vault_mocks, runtime_environ):
        """Test error when no entrypoint is given."""
        with pytest.raises(NoEntrypointError) as exc_info:
            prepare_launch([], runtime_environ)

        assert "can't determine the entrypoint" in str(exc_info.value)

    def test_command_not_found(self, vault_mocks, runtime_environ):
        """Test that lookup failures propagate."""
        vault_mocks["find"].side_effect = ExecutableNotFoundError("app")

        with pytest.raises(ExecutableNotFoundError):
            prepare_launch(["app"], runtime_environ)


class TestRun:
    """Tests for the full flow."""

    def test_run_execs_plan(self, runtime_environ):
        """Test that the prepared plan is handed to exec."""
        plan = LaunchPlan(binary="/usr/local/bin/app", argv=("app",), environ={"A": "1"})
        with (
            patch("vault_injector.runtime.runner.prepare_launch", return_value=plan) as mock_prepare,
            patch("vault_injector.runtime.runner.exec_program") as mock_exec,
        ):
            run(["app"], runtime_environ)

        mock_prepare.assert_called_once_with(["app"], runtime_environ)
        mock_exec.assert_called_once_with(plan)

    def test_run_does_not_exec_on_failure(self, runtime_environ):
        """Test that no exec happens when preparation fails."""
        with (
            patch("vault_injector.runtime.runner.prepare_launch", side_effect=MissingSecretKeyError("db")),
            patch("vault_injector.runtime.runner.exec_program") as mock_exec,
        ):
            with pytest.raises(MissingSecretKeyError):
                run(["app"], runtime_environ)

        mock_exec.assert_not_called()
