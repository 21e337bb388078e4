"""Runtime configuration for the floater API client."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:3001"
DEFAULT_TIMEOUT = 10.0  # seconds


@dataclass(frozen=True)
class ClientConfig:
    """Where the floater API lives and how long to wait for it."""

    base_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "ClientConfig":
        """Build a config from ``FLOATER_API_URL`` / ``FLOATER_API_TIMEOUT``.

        A ``.env`` file is loaded first when present; variables already set
        in the environment take precedence over it.
        """
        env_path = Path(env_file) if env_file else Path.cwd() / ".env"
        if env_path.exists():
            load_dotenv(env_path)

        timeout = os.getenv("FLOATER_API_TIMEOUT")
        return cls(
            base_url=os.getenv("FLOATER_API_URL", DEFAULT_API_URL).rstrip("/"),
            timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
        )
