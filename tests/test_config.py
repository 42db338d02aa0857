"""
Tests for roster.config module.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from roster.config import DEFAULT_INVITE_SUBJECT, RosterConfig, load_config

SALT = "test-salt-0123456789"


class TestRosterConfig:
    """Tests for RosterConfig class."""

    def test_config_defaults(self):
        """Test defaults with only the salt set."""
        config = RosterConfig(salt=SALT)
        assert config.backend == "memory"
        assert config.invite_expire_hours == 72
        assert config.max_write_retries == 5
        assert config.enable_activity_log is True
        assert config.invite_email_format == "text"
        assert config.invite_email_subject == DEFAULT_INVITE_SUBJECT
        assert config.mailgun_enabled is False

    def test_salt_required(self):
        """Test that the salt has no default."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValidationError):
                RosterConfig(_env_file=None)

    def test_salt_too_short(self):
        with pytest.raises(ValidationError) as exc_info:
            RosterConfig(salt="short")
        assert "salt appears invalid" in str(exc_info.value)

    def test_invite_expire_hours_must_be_positive(self):
        with pytest.raises(ValidationError):
            RosterConfig(salt=SALT, invite_expire_hours=0)

    def test_url_trailing_slash_removed(self):
        config = RosterConfig(
            salt=SALT,
            invite_url="https://app.example.com/invite/",
            mailgun_base_url="https://api.eu.mailgun.net/v3/",
        )
        assert config.invite_url == "https://app.example.com/invite"
        assert config.mailgun_base_url == "https://api.eu.mailgun.net/v3"

    def test_supabase_backend_requires_credentials(self):
        """Test that the supabase backend needs url and key."""
        with pytest.raises(ValidationError) as exc_info:
            RosterConfig(salt=SALT, backend="supabase")
        assert "supabase_url" in str(exc_info.value)

    def test_supabase_url_validation_invalid(self):
        with pytest.raises(ValidationError) as exc_info:
            RosterConfig(
                salt=SALT,
                backend="supabase",
                supabase_url="http://test.supabase.co",
                supabase_key="test-key-12345678901234567890",
            )
        assert "must start with https://" in str(exc_info.value)

    def test_supabase_config(self):
        config = RosterConfig(
            salt=SALT,
            backend="supabase",
            supabase_url="https://test.supabase.co/",
            supabase_key="test-key-12345678901234567890",
            db_schema="roster",
        )
        assert config.supabase_url == "https://test.supabase.co"
        assert config.db_schema == "roster"
        assert config.documents_table == "roster_documents"

    def test_mailgun_enabled(self):
        config = RosterConfig(
            salt=SALT,
            mailgun_api_key="key-123",
            mailgun_domain="mg.example.com",
            mail_from="Example <noreply@example.com>",
        )
        assert config.mailgun_enabled is True

    def test_invalid_email_format(self):
        with pytest.raises(ValidationError):
            RosterConfig(salt=SALT, invite_email_format="markdown")


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_config_with_kwargs(self):
        config = load_config(salt=SALT, invite_expire_hours=48)
        assert config.invite_expire_hours == 48

    def test_load_config_from_env(self):
        """Test loading config from environment variables."""
        env = {
            "ROSTER_SALT": SALT,
            "ROSTER_INVITE_EXPIRE_HOURS": "24",
            "ROSTER_SITE_NAME": "Acme Cloud",
            "ROSTER_ENABLE_ACTIVITY_LOG": "false",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_config()
            assert config.salt == SALT
            assert config.invite_expire_hours == 24
            assert config.site_name == "Acme Cloud"
            assert config.enable_activity_log is False

    def test_kwargs_override_env(self):
        with patch.dict(os.environ, {"ROSTER_SALT": SALT, "ROSTER_SITE_NAME": "Env"}, clear=True):
            config = load_config(site_name="Kwarg")
            assert config.site_name == "Kwarg"
