"""Engine configuration via environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings

DEFAULT_FALLBACK_MESSAGE = (
    "New role was added or existing password policy changed. "
    "Please update your password."
)


class PolicySettings(BaseSettings):
    """Loaded from PWPOLICY_* env vars or .env file."""

    # Longer passwords are rejected by the password layer itself (UTF-8 bytes).
    max_password_length: int = 512

    fallback_message: str = DEFAULT_FALLBACK_MESSAGE

    # Paths
    policy_file: str = "policies.yaml"
    database_url: str = "sqlite:///password_policy.db"

    model_config = {
        "env_prefix": "PWPOLICY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
