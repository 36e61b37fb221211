"""
Centralized configuration for the Game Night Manager.

Deployment settings come from environment variables (loaded from .env.local /
.env by the entry points) and are collected into a GameNightConfig value that
is passed explicitly to everything that needs it.
"""

import os
from dataclasses import dataclass


class ConfigError(Exception):
    """Raised when a required configuration value is missing or malformed."""

    pass


def get_sentry_environment() -> str:
    """Environment tag for Sentry events (SENTRY_ENVIRONMENT, default "development")."""
    return os.getenv("SENTRY_ENVIRONMENT") or "development"


def get_api_port() -> int:
    """Get API server port from env or default."""
    return int(os.getenv("API_PORT", "8000"))


def _parse_id_list(raw: str) -> tuple[str, ...]:
    """Parse a comma separated list of snowflake IDs, ignoring blanks."""
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class GameNightConfig:
    """Deployment configuration for the game night command handler."""

    discord_token: str
    application_id: str
    public_key: str
    guild_id: str
    game_night_category_id: str
    log_channel_id: str
    staff_role_ids: tuple[str, ...] = ()
    user_role_id: str | None = None
    banned_role_id: str | None = None

    @property
    def effective_user_role_id(self) -> str:
        """Role whose overwrite is toggled by lock/unlock (guild @everyone if unset)."""
        return self.user_role_id or self.guild_id

    @property
    def service_actor_id(self) -> str:
        """The bot user ID. Discord bot users share their application's ID."""
        return self.application_id

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "GameNightConfig":
        """
        Build configuration from environment variables.

        Raises:
            ConfigError: If any required variable is unset
        """
        env = os.environ if environ is None else environ

        missing = [
            name
            for name, _ in REQUIRED_ENV_VARS
            if not env.get(name)
        ]
        if missing:
            raise ConfigError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        return cls(
            discord_token=env["DISCORD_TOKEN"],
            application_id=env["DISCORD_APPLICATION_ID"],
            public_key=env["DISCORD_PUBLIC_KEY"],
            guild_id=env["GUILD_ID"],
            game_night_category_id=env["GAME_NIGHT_CATEGORY_ID"],
            log_channel_id=env["LOG_CHANNEL_ID"],
            staff_role_ids=_parse_id_list(env.get("STAFF_ROLE_IDS", "")),
            user_role_id=env.get("USER_ROLE_ID") or None,
            banned_role_id=env.get("BANNED_ROLE_ID") or None,
        )


# Required environment variables
# Format: (name, description)
REQUIRED_ENV_VARS = [
    ("DISCORD_TOKEN", "Discord bot token"),
    ("DISCORD_APPLICATION_ID", "Discord application (bot user) ID"),
    ("DISCORD_PUBLIC_KEY", "Application public key for interaction signatures"),
    ("GUILD_ID", "Discord server ID where commands are accepted"),
    ("GAME_NIGHT_CATEGORY_ID", "Category holding the game night voice channels"),
    ("LOG_CHANNEL_ID", "Channel receiving command error reports"),
]

# Optional variables that change behaviour when set
OPTIONAL_ENV_VARS = [
    ("STAFF_ROLE_IDS", "Comma separated staff role IDs"),
    ("USER_ROLE_ID", "Role allowed to join game night channels"),
    ("BANNED_ROLE_ID", "Role denied from game night channels"),
    ("DATABASE_URL", "PostgreSQL connection string for the user limit"),
    ("SENTRY_DSN", "Sentry error reporting"),
    ("SENTRY_ENVIRONMENT", "Sentry environment tag, e.g. production"),
]


def check_required_env_vars() -> tuple[bool, list[str]]:
    """
    Check that required environment variables are set.

    Returns:
        (all_ok, warnings): Tuple of success flag and list of warning messages
    """
    warnings = []
    errors = []

    for name, description in REQUIRED_ENV_VARS:
        if not os.environ.get(name):
            errors.append(f"  ✗ {name}: Not set ({description})")

    for name, description in OPTIONAL_ENV_VARS:
        if not os.environ.get(name):
            warnings.append(f"  ⚠ {name}: Not set ({description})")

    if errors:
        for error in errors:
            print(error)
        return False, warnings

    return True, warnings
