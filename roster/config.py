"""
Roster configuration management.

Loads configuration from environment variables or .env file.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_INVITE_SUBJECT = "{{sender_name}} invited you to join {{site_name}}"

DEFAULT_INVITE_BODY = (
    "Hi,\n\n"
    "{{sender_name}} has invited you to join their account on {{site_name}}.\n\n"
    "Accept the invitation here: {{invite_link}}\n"
)


class RosterConfig(BaseSettings):
    """
    Roster configuration settings.

    Can be loaded from:
    1. Environment variables (ROSTER_SALT, ROSTER_INVITE_EXPIRE_HOURS, etc.)
    2. .env file in project root
    3. Direct instantiation with kwargs

    Example:
        ```python
        # From environment
        config = RosterConfig()

        # Direct instantiation
        config = RosterConfig(
            backend="supabase",
            supabase_url="https://xxx.supabase.co",
            supabase_key="your-key",
            salt="long-random-secret",
        )
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="ROSTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage backend
    backend: Literal["memory", "supabase"] = Field(
        default="memory",
        description="Document store backend (memory for development and tests)",
    )

    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co)",
    )

    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key",
    )

    db_schema: str = Field(
        default="public",
        description="PostgreSQL schema where the documents table lives",
    )

    documents_table: str = Field(
        default="roster_documents",
        description="Table holding (collection, id, data, version) rows",
    )

    # Invitations
    salt: str = Field(
        ...,
        description="Secret salt used to digest invited email addresses",
    )

    invite_expire_hours: int = Field(
        default=72,
        ge=1,
        description="Hours an invite remains acceptable after creation",
    )

    # Concurrency
    max_write_retries: int = Field(
        default=5,
        ge=1,
        description="Attempts for a roster read-modify-write before giving up",
    )

    enable_activity_log: bool = Field(
        default=True,
        description="Record activity entries for account lifecycle events",
    )

    # Invite email
    site_name: str = Field(default="Roster")
    invite_url: str = Field(
        default="http://localhost:3000/invite",
        description="Base URL of the invite acceptance page; the invite ID is appended",
    )
    mail_from: Optional[str] = None
    mailgun_api_key: Optional[str] = None
    mailgun_domain: Optional[str] = None
    mailgun_base_url: str = "https://api.mailgun.net/v3"
    invite_email_subject: str = DEFAULT_INVITE_SUBJECT
    invite_email_body: str = DEFAULT_INVITE_BODY
    invite_email_format: Literal["text", "html"] = "text"

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    @field_validator("salt")
    @classmethod
    def validate_salt(cls, v: str) -> str:
        """Ensure the salt is long enough to be a secret."""
        if len(v) < 8:
            raise ValueError("salt appears invalid (too short)")
        return v

    @field_validator("supabase_url")
    @classmethod
    def validate_supabase_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.startswith("https://"):
            raise ValueError("supabase_url must start with https://")
        return v.rstrip("/")

    @field_validator("invite_url", "mailgun_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_backend(self) -> "RosterConfig":
        """The supabase backend needs connection settings."""
        if self.backend == "supabase" and not (self.supabase_url and self.supabase_key):
            raise ValueError("supabase backend requires supabase_url and supabase_key")
        return self

    @property
    def mailgun_enabled(self) -> bool:
        return bool(self.mailgun_api_key and self.mailgun_domain and self.mail_from)


def load_config(**kwargs) -> RosterConfig:
    """
    Load Roster configuration.

    Priority order:
    1. Keyword arguments
    2. Environment variables (ROSTER_*)
    3. .env file

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    return RosterConfig(**kwargs)
