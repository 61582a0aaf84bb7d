"""Environment-based configuration for the Twitter MCP server."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional

from social_clients import ApiKeyCredentials, PasswordCredentials

DEFAULT_LOG_DIR = Path(__file__).parent.parent.parent / "logs"

PASSWORD_VARS = ["TWITTER_USERNAME", "TWITTER_PASSWORD"]
API_KEY_VARS = [
    "TWITTER_API_KEY",
    "TWITTER_API_SECRET_KEY",
    "TWITTER_ACCESS_TOKEN",
    "TWITTER_ACCESS_TOKEN_SECRET",
]


def missing_variables(names: List[str], environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Check which of the given environment variables are unset or empty."""
    env = os.environ if environ is None else environ
    return [name for name in names if not env.get(name)]


@dataclass(frozen=True)
class Settings:
    password_credentials: Optional[PasswordCredentials]
    api_key_credentials: Optional[ApiKeyCredentials]
    log_dir: Path = DEFAULT_LOG_DIR
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Read credentials and logging options from the environment.

        A login tier is configured only when all of its required variables are
        set; ``TWITTER_EMAIL`` is optional for the password tier.
        """
        env = os.environ if environ is None else environ

        password_credentials = None
        if not missing_variables(PASSWORD_VARS, env):
            password_credentials = PasswordCredentials(
                username=env["TWITTER_USERNAME"],
                password=env["TWITTER_PASSWORD"],
                email=env.get("TWITTER_EMAIL") or None,
            )

        api_key_credentials = None
        if not missing_variables(API_KEY_VARS, env):
            api_key_credentials = ApiKeyCredentials(*(env[name] for name in API_KEY_VARS))

        return cls(
            password_credentials=password_credentials,
            api_key_credentials=api_key_credentials,
            log_dir=Path(env.get("TWITTER_MCP_LOG_DIR") or DEFAULT_LOG_DIR),
            log_level=(env.get("TWITTER_MCP_LOG_LEVEL") or "INFO").upper(),
        )
