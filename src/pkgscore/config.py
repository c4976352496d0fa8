"""Runtime configuration."""

import os

from pydantic import BaseModel


class Settings(BaseModel):
    """Process-wide settings shared by the fetchers.

    The GitHub token is only required for license checks; everything else
    works anonymously.
    """

    github_token: str | None = None
    github_api_url: str = "https://api.github.com"
    npm_registry_url: str = "https://registry.npmjs.org"
    timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Reads ``GITHUB_TOKEN``, ``GITHUB_API_URL``, ``NPM_REGISTRY_URL`` and
        ``PKGSCORE_TIMEOUT``. Empty values are treated as unset.
        """
        values: dict[str, str] = {}
        env_map = {
            "github_token": "GITHUB_TOKEN",
            "github_api_url": "GITHUB_API_URL",
            "npm_registry_url": "NPM_REGISTRY_URL",
            "timeout": "PKGSCORE_TIMEOUT",
        }
        for field_name, env_name in env_map.items():
            value = os.environ.get(env_name)
            if value:
                values[field_name] = value
        return cls(**values)
