"""Configuration service for loading mdtasks.yml."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models import GitConfig, MdtasksConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and caching project configuration."""

    CONFIG_FILE = "mdtasks.yml"

    def __init__(self, project_root: Path) -> None:
        """Initialize the config service.

        Args:
            project_root: Path to the directory containing mdtasks.yml
        """
        self.project_root = project_root
        self._config: MdtasksConfig | None = None
        self._config_error: str | None = None

    @property
    def has_config_error(self) -> bool:
        """Check if there was an error loading config."""
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        """Get the config error message if any."""
        return self._config_error

    @property
    def task_root(self) -> Path:
        """Directory holding the task files."""
        return self.project_root / self.get_config().task_dir

    def get_config(self) -> MdtasksConfig:
        """Get configuration, loading from file if not cached."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def get_git_config(self) -> GitConfig:
        """Convenience method to get git workflow configuration."""
        return self.get_config().git

    def _load_config(self) -> MdtasksConfig:
        """Load configuration from file or return default."""
        config_path = self.project_root / self.CONFIG_FILE
        self._config_error = None

        if not config_path.exists():
            logger.debug("No %s found, using defaults", self.CONFIG_FILE)
            return MdtasksConfig.default()

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            return self._fallback(f"Invalid YAML in {self.CONFIG_FILE}: {e}")
        except OSError as e:
            return self._fallback(f"Error reading {self.CONFIG_FILE}: {e}")

        if data is None:
            return self._fallback(f"{self.CONFIG_FILE} is empty")
        if not isinstance(data, dict):
            return self._fallback(f"{self.CONFIG_FILE} must contain a mapping")

        try:
            config = MdtasksConfig(**data)
        except ValidationError as e:
            return self._fallback(f"Invalid {self.CONFIG_FILE}: {e}")

        logger.info("Loaded %s (task_dir=%s)", self.CONFIG_FILE, config.task_dir)
        return config

    def _fallback(self, message: str) -> MdtasksConfig:
        self._config_error = message
        logger.warning(message)
        return MdtasksConfig.default()
