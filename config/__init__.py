import importlib
import os
from types import ModuleType

# APP_ENV value -> settings module; anything unrecognised falls back to development.
_ENVIRONMENTS = {
    "dev": "development",
    "development": "development",
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
}


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").strip().lower()
    return f"config.{_ENVIRONMENTS.get(env, 'development')}"


def load_settings() -> ModuleType:
    return importlib.import_module(get_settings_module())
