import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError
from xpath_locator.formatter import PathFormat

from .models import CopierSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path(".xpath-copier.toml")


class CopierConfig:
    """Handles loading and validation of .xpath-copier.toml configuration"""

    def __init__(self, config_path: Path | None = None):
        self.settings = CopierSettings()

        if config_path and config_path.exists():
            self._load_from_file(config_path)

    def _load_from_file(self, path: Path):
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Could not read %s, using defaults: %s", path, e)
            return

        copier_data = data.get("tool", {}).get("xpath-copier", {})
        try:
            self.settings = CopierSettings.model_validate(copier_data)
        except ValidationError as e:
            # Fallback to defaults if validation fails
            logger.warning("Invalid settings in %s, using defaults: %s", path, e)

    def is_format_enabled(self, path_format: PathFormat) -> bool:
        """Custom templates are always allowed; other formats default to enabled"""
        if path_format is PathFormat.CUSTOM:
            return True
        return self.settings.enabled_formats.get(path_format.value, True)
