"""Tests for runtime/sanitizer.py module."""

import pytest

from vault_injector.constants import VAULT_BOOTSTRAP_VARIABLES
from vault_injector.exceptions import MissingSecretKeyError
from vault_injector.runtime.sanitizer import sanitize_environ


class TestSanitizeEnviron:
    """Tests for building the launched program's environment."""

    def test_reference_is_resolved(self):
        """Test that a vault: value is replaced by the secret."""
        result = sanitize_environ({"API_KEY": "vault:API_KEY"}, {"API_KEY": "xyz"})

        assert result == {"API_KEY": "xyz"}

    def test_reference_under_other_name(self):
        """Test that the entry keeps its own name, not the key's."""
        result = sanitize_environ({"DB_PASSWORD": "vault:postgres"}, {"postgres": "s3cr3t"})

        assert result == {"DB_PASSWORD": "s3cr3t"}

    def test_missing_key_is_fatal(self):
        """Test that a dangling reference raises."""
        with pytest.raises(MissingSecretKeyError) as exc_info:
            sanitize_environ({"API_KEY": "vault:MISSING"}, {"API_KEY": "xyz"})

        assert exc_info.value.key == "MISSING"
        assert str(exc_info.value) == "key not found: MISSING"

    def test_bootstrap_variables_removed(self, runtime_environ):
        """Test that the runtime's own Vault settings never reach the program."""
        result = sanitize_environ(runtime_environ, {"AWS_SECRET_ACCESS_KEY": "abc"})

        assert result == {
            "PATH": "/usr/local/bin:/usr/bin:/bin",
            "AWS_SECRET_ACCESS_KEY": "abc",
            "LOG_LEVEL": "info",
        }

    @pytest.mark.parametrize("name", sorted(VAULT_BOOTSTRAP_VARIABLES))
    def test_every_bootstrap_variable_removed(self, name):
        """Test each allow-listed name, including resolved references."""
        assert sanitize_environ({name: "literal"}, {}) == {}
        assert sanitize_environ({name: "vault:KEY"}, {"KEY": "value"}) == {}

    def test_order_is_preserved(self):
        """Test that surviving entries keep their relative order."""
        environ = {"C": "3", "VAULT_TOKEN": "t", "A": "vault:a", "B": "2"}

        result = sanitize_environ(environ, {"a": "1"})

        assert list(result.items()) == [("C", "3"), ("A", "1"), ("B", "2")]

    def test_input_is_not_modified(self):
        """Test that the inherited environment is left alone."""
        environ = {"API_KEY": "vault:API_KEY", "VAULT_ROLE": "r"}

        sanitize_environ(environ, {"API_KEY": "xyz"})

        assert environ == {"API_KEY": "vault:API_KEY", "VAULT_ROLE": "r"}
