"""
Configuration manager for quiz application settings.
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import AppSettings


class ConfigManager:
    """Manages application settings loaded from config.json and the environment."""

    # Default configuration values
    DEFAULT_STORAGE_PATH = "./.alien_quiz/storage.json"
    DEFAULT_STORAGE_NAMESPACE = "alienQuiz_"
    DEFAULT_CATALOG_FILE = None  # Use the built-in catalog
    DEFAULT_RESUME_PROMPT = True
    DEFAULT_LOG_LEVEL = "INFO"
    DEFAULT_LOG_DIRECTORY = "./logs/"

    VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    MAX_NAMESPACE_LENGTH = 64

    # Environment overrides
    ENV_STORAGE_PATH = "ALIEN_QUIZ_STORAGE_PATH"
    ENV_CATALOG_FILE = "ALIEN_QUIZ_CATALOG"

    def __init__(self):
        """Initialize ConfigManager with default settings."""
        self.logger = logging.getLogger(__name__)
        self._settings = AppSettings()

    def get_settings(self) -> AppSettings:
        """
        Get current settings.

        Returns:
            Copy of the current AppSettings
        """
        return AppSettings(
            storage_path=self._settings.storage_path,
            storage_namespace=self._settings.storage_namespace,
            catalog_file=self._settings.catalog_file,
            resume_prompt=self._settings.resume_prompt,
            log_level=self._settings.log_level,
            log_directory=self._settings.log_directory
        )

    def _success(self, message: str, user_message: str) -> Dict[str, Any]:
        self.logger.info(message)
        return {
            'success': True,
            'message': message,
            'user_message': user_message
        }

    def _failure(self, error_msg: str, user_message: str) -> Dict[str, Any]:
        self.logger.error(error_msg)
        return {
            'success': False,
            'error': error_msg,
            'user_message': user_message
        }

    def set_storage_path(self, path: str) -> Dict[str, Any]:
        """
        Set the file used to persist quiz progress.

        Args:
            path: Path to the JSON storage file

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if not isinstance(path, str):
            return self._failure(
                f"Storage path must be a string, got {type(path).__name__}",
                f"❌ Invalid input: Expected a path string, got {type(path).__name__}"
            )

        if not path.strip():
            return self._failure("Storage path cannot be empty", "❌ Storage path cannot be empty")

        if Path(path).is_dir():
            return self._failure(
                f"Storage path is a directory: {path}",
                f"❌ Storage path must be a file, not a directory: {path}"
            )

        self._settings.storage_path = path
        return self._success(f"Storage path set to {path}", f"✅ Progress will be saved to {path}")

    def set_storage_namespace(self, namespace: str) -> Dict[str, Any]:
        """
        Set the key prefix that scopes this quiz's entries in storage.

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if not isinstance(namespace, str):
            return self._failure(
                f"Storage namespace must be a string, got {type(namespace).__name__}",
                f"❌ Invalid input: Expected text, got {type(namespace).__name__}"
            )

        if not namespace.strip():
            return self._failure("Storage namespace cannot be empty", "❌ Storage namespace cannot be empty")

        if len(namespace) > self.MAX_NAMESPACE_LENGTH:
            return self._failure(
                f"Storage namespace cannot exceed {self.MAX_NAMESPACE_LENGTH} characters",
                f"❌ Namespace too long: Maximum is {self.MAX_NAMESPACE_LENGTH} characters"
            )

        self._settings.storage_namespace = namespace
        return self._success(f"Storage namespace set to {namespace}", f"✅ Storage namespace set to {namespace}")

    def set_catalog_file(self, catalog_file: Optional[str]) -> Dict[str, Any]:
        """
        Set a custom JSON catalog file, or None for the built-in catalog.

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if catalog_file is None:
            self._settings.catalog_file = None
            return self._success("Catalog set to built-in Alien: Earth catalog", "✅ Using the built-in catalog")

        if not isinstance(catalog_file, str):
            return self._failure(
                f"Catalog file must be a string, got {type(catalog_file).__name__}",
                f"❌ Invalid input: Expected a path string, got {type(catalog_file).__name__}"
            )

        if not catalog_file.strip():
            return self._failure("Catalog file cannot be empty", "❌ Catalog file path cannot be empty")

        if not catalog_file.lower().endswith(".json"):
            return self._failure(
                f"Catalog file must be a .json file: {catalog_file}",
                f"❌ Catalog must be a JSON file: {catalog_file}"
            )

        self._settings.catalog_file = catalog_file
        return self._success(f"Catalog file set to {catalog_file}", f"✅ Catalog will be loaded from {catalog_file}")

    def set_resume_prompt(self, resume_prompt: bool) -> Dict[str, Any]:
        """
        Set whether saved progress is offered for resuming at start.

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if not isinstance(resume_prompt, bool):
            return self._failure(
                f"Resume prompt must be a boolean, got {type(resume_prompt).__name__}",
                f"❌ Invalid input: Expected true/false, got {type(resume_prompt).__name__}"
            )

        self._settings.resume_prompt = resume_prompt
        state = "enabled" if resume_prompt else "disabled"
        return self._success(f"Resume prompt {state}", f"✅ Resume prompt {state}")

    def set_log_level(self, level: str) -> Dict[str, Any]:
        """
        Set the logging level name.

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if not isinstance(level, str):
            return self._failure(
                f"Log level must be a string, got {type(level).__name__}",
                f"❌ Invalid input: Expected a level name, got {type(level).__name__}"
            )

        normalized = level.strip().upper()
        if normalized not in self.VALID_LOG_LEVELS:
            return self._failure(
                f"Unknown log level: {level}",
                f"❌ Unknown log level '{level}'. Use one of: {', '.join(self.VALID_LOG_LEVELS)}"
            )

        self._settings.log_level = normalized
        return self._success(f"Log level set to {normalized}", f"✅ Log level set to {normalized}")

    def set_log_directory(self, directory: str) -> Dict[str, Any]:
        """
        Set the directory for log files.

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if not isinstance(directory, str):
            return self._failure(
                f"Log directory must be a string, got {type(directory).__name__}",
                f"❌ Invalid input: Expected a path string, got {type(directory).__name__}"
            )

        if not directory.strip():
            return self._failure("Log directory cannot be empty", "❌ Log directory cannot be empty")

        self._settings.log_directory = directory
        return self._success(f"Log directory set to {directory}", f"✅ Logs will be written to {directory}")

    def load_from_dict(self, config: Dict[str, Any]) -> List[str]:
        """
        Apply settings from a parsed config.json structure.

        Expected structure (every section and key optional):
        {
            "storage": {"path": str, "namespace": str},
            "catalog": {"file": str | null},
            "quiz": {"resume_prompt": bool},
            "logging": {"level": str, "log_directory": str}
        }

        Args:
            config: Parsed configuration

        Returns:
            List of error messages for settings that were rejected
        """
        errors: List[str] = []

        if not isinstance(config, dict):
            errors.append("Configuration must be a JSON object")
            return errors

        setters = [
            ('storage', 'path', self.set_storage_path),
            ('storage', 'namespace', self.set_storage_namespace),
            ('catalog', 'file', self.set_catalog_file),
            ('quiz', 'resume_prompt', self.set_resume_prompt),
            ('logging', 'level', self.set_log_level),
            ('logging', 'log_directory', self.set_log_directory),
        ]

        invalid_sections = set()
        for section_name, key, setter in setters:
            section = config.get(section_name, {})
            if not isinstance(section, dict):
                if section_name not in invalid_sections:
                    invalid_sections.add(section_name)
                    errors.append(f"'{section_name}' section must be an object")
                continue
            if key in section:
                result = setter(section[key])
                if not result['success']:
                    errors.append(result['error'])

        return errors

    def apply_environment_overrides(self, environ: Optional[Dict[str, str]] = None) -> List[str]:
        """
        Apply environment variable overrides (these take precedence over config.json).

        Returns:
            List of error messages for rejected overrides
        """
        environ = os.environ if environ is None else environ
        errors: List[str] = []

        storage_path = environ.get(self.ENV_STORAGE_PATH)
        if storage_path:
            result = self.set_storage_path(storage_path)
            if not result['success']:
                errors.append(result['error'])

        catalog_file = environ.get(self.ENV_CATALOG_FILE)
        if catalog_file:
            result = self.set_catalog_file(catalog_file)
            if not result['success']:
                errors.append(result['error'])

        return errors

    def validate_settings(self) -> Dict[str, Any]:
        """
        Validate current settings and return validation results.

        Returns:
            Dictionary with validation results and any issues found
        """
        validation_result = {
            "valid": True,
            "issues": []
        }

        if not isinstance(self._settings.storage_path, str) or not self._settings.storage_path.strip():
            validation_result["valid"] = False
            validation_result["issues"].append(f"Invalid storage path: {self._settings.storage_path}")

        namespace = self._settings.storage_namespace
        if (not isinstance(namespace, str) or not namespace.strip()
                or len(namespace) > self.MAX_NAMESPACE_LENGTH):
            validation_result["valid"] = False
            validation_result["issues"].append(f"Invalid storage namespace: {namespace}")

        catalog_file = self._settings.catalog_file
        if catalog_file is not None and not Path(catalog_file).is_file():
            validation_result["valid"] = False
            validation_result["issues"].append(f"Catalog file not found: {catalog_file}")

        if not isinstance(self._settings.resume_prompt, bool):
            validation_result["valid"] = False
            validation_result["issues"].append(f"Invalid resume prompt setting: {self._settings.resume_prompt}")

        if self._settings.log_level not in self.VALID_LOG_LEVELS:
            validation_result["valid"] = False
            validation_result["issues"].append(f"Invalid log level: {self._settings.log_level}")

        return validation_result

    def get_settings_summary(self) -> str:
        """
        Get a formatted summary of current settings.

        Returns:
            Human-readable string describing current settings
        """
        catalog_str = self._settings.catalog_file or "built-in (Alien: Earth)"
        resume_str = "ask" if self._settings.resume_prompt else "never"

        return (
            f"Quiz Settings:\n"
            f"• Catalog: {catalog_str}\n"
            f"• Progress File: {self._settings.storage_path}\n"
            f"• Storage Namespace: {self._settings.storage_namespace}\n"
            f"• Resume Saved Progress: {resume_str}\n"
            f"• Log Level: {self._settings.log_level}"
        )
