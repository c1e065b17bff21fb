import importlib
import os
from types import SimpleNamespace
from typing import Any, Dict, Optional


def get_settings_module() -> str:
    # APP_ENV selects the settings module; defaults to development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def load_settings(overrides: Optional[Dict[str, Any]] = None) -> SimpleNamespace:
    """Upper-case values of the selected settings module, with ``overrides`` applied."""
    module_name = get_settings_module()
    module = importlib.import_module(module_name)
    values = {k: getattr(module, k) for k in dir(module) if k.isupper()}
    values.update(overrides or {})
    values["SETTINGS_MODULE"] = module_name
    return SimpleNamespace(**values)
