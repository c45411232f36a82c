# painmap/infrastructure/config/json_config_repository.py

"""
JSON-based implementation of the configuration repository.

Stores the pain map settings in a JSON file on disk.
"""
import os
import json
import math
from typing import Dict, Any

from painmap.domain.services.i_config_repository_service import IConfigRepository
from painmap.domain.services.i_logger_service import ILoggerService
from painmap.domain.common.result import Result
from painmap.domain.common.errors import ConfigurationError
from painmap.domain.models.hotspot import View
from painmap.domain.models.pain_area import DEFAULT_INTENSITY, is_valid_intensity

DEFAULT_DISPLAY_SCALE = 0.85
DEFAULT_ALPHA_THRESHOLD = 10


class JsonConfigRepository(IConfigRepository):
    """
    JSON-based implementation of the configuration repository.

    The file is cached in memory and reloaded when its modification time
    changes. Missing keys are filled in from DEFAULT_CONFIG.
    """

    DEFAULT_CONFIG = {
        "display_scale": DEFAULT_DISPLAY_SCALE,  # Always store as float
        "alpha_threshold": DEFAULT_ALPHA_THRESHOLD,  # Always store as int
        "default_intensity": DEFAULT_INTENSITY,
        "default_view": View.BACK.value,
        "front_image": os.path.join("assets", "body-front.png"),
        "back_image": os.path.join("assets", "body-back.png"),
        "catalog_path": "",  # Empty means the packaged hotspot table
        "capture_dir": os.path.join("uploads", "assessment_files"),
        "log_level": "INFO",
        "log_dir": "logs"
    }

    def __init__(self, config_file: str, logger: ILoggerService):
        """
        Initialize the repository.

        Args:
            config_file: Path to the JSON configuration file
            logger: Logger service
        """
        self.config_file = config_file
        self.logger = logger
        self._config_cache = None
        self._last_modified = 0

    def load_config(self, force_reload: bool = False) -> Result[Dict[str, Any]]:
        """
        Load configuration from storage.

        Args:
            force_reload: Whether to force a reload from storage

        Returns:
            Result containing the configuration dictionary
        """
        if os.path.exists(self.config_file):
            mtime = os.path.getmtime(self.config_file)
            if mtime > self._last_modified:
                force_reload = True

        if self._config_cache is not None and not force_reload:
            return Result.ok(self._config_cache)

        if not os.path.exists(self.config_file):
            self.logger.warning("Config file not found. Creating new configuration with default settings.",
                                path=self.config_file)
            return self.save_config(dict(self.DEFAULT_CONFIG)).and_then(lambda _: Result.ok(self._config_cache))

        try:
            with open(self.config_file, "r") as f:
                config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            error = ConfigurationError(
                message=f"Failed to read config: {e}",
                details={"path": self.config_file},
                inner_error=e
            )
            self.logger.error(str(error))
            return Result.fail(error)

        if not isinstance(config, dict):
            return Result.fail(ConfigurationError(
                message="Config file must contain a JSON object",
                details={"path": self.config_file}
            ))

        self.logger.info(f"Config loaded successfully from {self.config_file}")
        self._last_modified = os.path.getmtime(self.config_file)

        # Merge missing default keys
        updated = False
        for key, default_value in self.DEFAULT_CONFIG.items():
            if key not in config:
                config[key] = default_value
                updated = True

        if updated:
            return self.save_config(config).and_then(lambda _: Result.ok(self._config_cache))

        self._config_cache = config
        return Result.ok(config)

    def save_config(self, config: Dict[str, Any]) -> Result[bool]:
        """
        Save configuration to storage.

        Args:
            config: Configuration dictionary

        Returns:
            Result indicating success or failure
        """
        try:
            config_dir = os.path.dirname(self.config_file)
            if config_dir:
                os.makedirs(config_dir, exist_ok=True)

            # Write to a temporary file, then replace the original in one step
            temp_path = f"{self.config_file}.tmp"
            with open(temp_path, "w") as f:
                json.dump(config, f, indent=4)
            os.replace(temp_path, self.config_file)

            self.logger.info(f"Config saved successfully to {self.config_file}")
            self._config_cache = config
            self._last_modified = os.path.getmtime(self.config_file)
            return Result.ok(True)
        except OSError as e:
            error = ConfigurationError(
                message=f"Failed to save config: {e}",
                details={"path": self.config_file},
                inner_error=e
            )
            self.logger.error(str(error))
            return Result.fail(error)

    def get_setting(self, key: str, default: Any = None) -> Any:
        """
        Get an application setting.

        Args:
            key: Setting key
            default: Default value if key not found

        Returns:
            Setting value or default
        """
        config_result = self.load_config()
        if config_result.is_failure:
            self.logger.error(f"Error loading config: {config_result.error}")
            return default
        return config_result.value.get(key, default)

    def set_setting(self, key: str, value: Any) -> Result[bool]:
        """
        Set an application setting and save the file.

        Args:
            key: Setting key
            value: Setting value

        Returns:
            Result indicating success or failure
        """
        config_result = self.load_config()
        if config_result.is_failure:
            return Result.fail(config_result.error)

        config = dict(config_result.value)
        config[key] = value
        return self.save_config(config)

    def get_display_scale(self) -> float:
        value = self.get_setting("display_scale", DEFAULT_DISPLAY_SCALE)
        try:
            scale = float(value)
        except (ValueError, TypeError):
            self.logger.warning(f"Invalid display_scale {value!r}, using {DEFAULT_DISPLAY_SCALE}")
            return DEFAULT_DISPLAY_SCALE
        if not math.isfinite(scale) or scale <= 0:
            self.logger.warning(f"Display scale must be a positive number, got {scale}, using {DEFAULT_DISPLAY_SCALE}")
            return DEFAULT_DISPLAY_SCALE
        return scale

    def get_alpha_threshold(self) -> int:
        value = self.get_setting("alpha_threshold", DEFAULT_ALPHA_THRESHOLD)
        try:
            threshold = int(value)
        except (ValueError, TypeError):
            self.logger.warning(f"Invalid alpha_threshold {value!r}, using {DEFAULT_ALPHA_THRESHOLD}")
            return DEFAULT_ALPHA_THRESHOLD
        return max(0, min(255, threshold))

    def get_default_intensity(self) -> int:
        value = self.get_setting("default_intensity", DEFAULT_INTENSITY)
        if not is_valid_intensity(value):
            self.logger.warning(f"Invalid default_intensity {value!r}, using {DEFAULT_INTENSITY}")
            return DEFAULT_INTENSITY
        return value

    def get_default_view(self) -> View:
        value = self.get_setting("default_view", View.BACK.value)
        try:
            return View.parse(value)
        except ValueError:
            self.logger.warning(f"Invalid default_view {value!r}, using {View.BACK.value}")
            return View.BACK

    def get_image_path(self, view: str) -> str:
        view = View.parse(view)
        return self.get_setting(f"{view.value}_image", self.DEFAULT_CONFIG[f"{view.value}_image"])
