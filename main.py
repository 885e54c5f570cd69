#!/usr/bin/env python3
"""
Alien: Earth Character Quiz - Main Entry Point

This script runs the quiz in the terminal. Settings are read from config.json
when present; environment variables override them.

Usage:
    python main.py

Configuration:
    1. Edit config.json to change the storage file, catalog or logging
    2. Or set the environment variables below

Environment Variables:
    ALIEN_QUIZ_CONFIG: Path to the configuration file (default: config.json)
    ALIEN_QUIZ_STORAGE_PATH: File used to save quiz progress
    ALIEN_QUIZ_CATALOG: Custom JSON catalog of characters and questions
"""

import sys
import os
import json
import logging
from pathlib import Path

from alien_quiz.catalog import CatalogError, CatalogLoader, default_catalog
from alien_quiz.config_manager import ConfigManager
from alien_quiz.quiz_controller import QuizController
from alien_quiz.quiz_engine import QuizEngine
from alien_quiz.storage import JsonFileStore, StorageManager


def load_config():
    """Load configuration from the config file, or defaults if it is absent."""
    config_path = Path(os.getenv('ALIEN_QUIZ_CONFIG', 'config.json'))

    if not config_path.exists():
        return {}

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
        return config
    except json.JSONDecodeError as e:
        print(f"❌ Error: Invalid JSON in {config_path}: {e}")
        sys.exit(1)
    except OSError as e:
        print(f"❌ Error loading {config_path}: {e}")
        sys.exit(1)


def build_config_manager(config):
    """Apply config file values and environment overrides."""
    config_manager = ConfigManager()
    errors = config_manager.load_from_dict(config)
    errors.extend(config_manager.apply_environment_overrides())
    if not errors:
        errors.extend(config_manager.validate_settings()['issues'])

    if errors:
        print("❌ Error: Invalid configuration:")
        for error in errors:
            print(f"  • {error}")
        sys.exit(1)

    return config_manager


def setup_logging_from_config(settings):
    """Set up logging based on configuration."""
    log_level = getattr(logging, settings.log_level.upper())
    log_directory = Path(settings.log_directory)

    # Create logs directory
    log_directory.mkdir(parents=True, exist_ok=True)

    # Log records go to the file only; the terminal belongs to the quiz
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_directory / "quiz.log", encoding='utf-8')
        ]
    )


def load_catalog(settings):
    """Load the configured catalog, falling back to the built-in one."""
    if settings.catalog_file is None:
        return default_catalog()

    try:
        return CatalogLoader().load_catalog_file(settings.catalog_file)
    except CatalogError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)


def run_quiz():
    """Run the quiz with configuration."""
    config_manager = build_config_manager(load_config())
    settings = config_manager.get_settings()

    setup_logging_from_config(settings)
    logging.getLogger(__name__).info(config_manager.get_settings_summary())

    catalog = load_catalog(settings)
    storage = StorageManager(JsonFileStore(settings.storage_path), settings.storage_namespace)
    engine = QuizEngine(catalog, storage)

    controller = QuizController(engine, resume_prompt=settings.resume_prompt)
    return controller.run()


if __name__ == "__main__":
    try:
        print("👽 Starting Alien: Earth Quiz...")
        run_quiz()
    except KeyboardInterrupt:
        print("\n👋 Quiz stopped by user")
