import os
from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "form_parser.yml"
CONFIG_ENV = "FORM_PARSER_CONFIG"

DEFAULT_ROOT_TAG = "form"
DEFAULT_SEPARATOR = "~~"


class FPConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {}) or {}
        self.definition = data.get("definition", {}) or {}
        self.logging = data.get("logging", {}) or {}
        self.debug = data.get("debug", False)

    @property
    def root_tag(self) -> str:
        return self.definition.get("root_tag") or DEFAULT_ROOT_TAG

    @property
    def separator(self) -> str:
        return self.definition.get("separator") or DEFAULT_SEPARATOR

    @property
    def forms_dir(self) -> str:
        return self.paths.get("forms_dir") or "forms"

    @property
    def store_dir(self) -> str:
        return self.paths.get("store_dir") or ".form_store"


def load_config(path=None) -> 'FPConfig':
    explicit = path or os.environ.get(CONFIG_ENV)
    config_path = Path(explicit) if explicit else CONFIG_PATH

    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return FPConfig({})

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return FPConfig(data)

_config_cache = None

def get_config() -> 'FPConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache
