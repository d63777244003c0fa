"""Configuration management."""

import json
import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3002


class Config:
    """Manages application configuration.

    User preferences live in a JSON settings file; deployment values
    (the API key, host and port) come from the environment, optionally
    seeded from a ``.env`` file.
    """

    def __init__(self, config_file: Path = None, environ: Optional[Mapping[str, str]] = None):
        if config_file is None:
            # Use user's home directory for config
            config_file = Path.home() / "tuberelay_settings.json"
        if environ is None:
            load_dotenv()
            environ = os.environ
        self.file = Path(config_file)
        self.environ = environ
        self.data = {
            "download_path": str(Path.home() / "Downloads" / "TubeRelay"),
        }
        self.load()

    def load(self):
        """Load configuration from file."""
        if self.file.exists():
            try:
                with open(self.file, 'r', encoding='utf-8') as f:
                    self.data.update(json.load(f))
            except (OSError, ValueError) as e:
                logger.warning(f"Ignoring unreadable settings file {self.file}: {e}")

    def save(self):
        """Save configuration to file."""
        try:
            self.file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.file, 'w', encoding='utf-8') as f:
                json.dump(self.data, f, indent=2)
        except OSError as e:
            logger.warning(f"Failed to save settings to {self.file}: {e}")

    def _env(self, name: str) -> Optional[str]:
        value = self.environ.get(name)
        if value is None:
            return None
        value = value.strip()
        return value or None

    @property
    def api_key(self) -> Optional[str]:
        """The media info API key, or None when not configured."""
        return self._env("RAPIDAPI_KEY")

    @property
    def host(self) -> str:
        return self._env("HOST") or DEFAULT_HOST

    @property
    def port(self) -> int:
        raw = self._env("PORT")
        if raw is None:
            return DEFAULT_PORT
        try:
            return int(raw)
        except ValueError:
            logger.warning(f"Invalid PORT {raw!r}, using {DEFAULT_PORT}")
            return DEFAULT_PORT

    @property
    def local_server_url(self) -> str:
        """URL a relay served on HOST/PORT by this process is reachable at."""
        host = self.host
        if host in ("0.0.0.0", "::"):
            host = DEFAULT_HOST
        return f"http://{host}:{self.port}"

    @property
    def server_url(self) -> str:
        """Base URL of the relay server used by the desktop client."""
        url = self._env("TUBERELAY_SERVER_URL") or self.data.get("server_url") or self.local_server_url
        return url.rstrip("/")

    @property
    def download_path(self) -> Path:
        """Get the download path."""
        return Path(self.data.get("download_path") or Path.home() / "Downloads" / "TubeRelay")

    def set_download_path(self, path: str | Path):
        """Set the download path."""
        self.data["download_path"] = str(path)
        self.save()
