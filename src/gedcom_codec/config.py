import os
from pathlib import Path

import yaml

from gedcom_codec.utils.pathing import resolve_project_path

CONFIG_PATH = resolve_project_path("config/gedcom_codec.yml")
CONFIG_ENV_VAR = "GEDCOM_CODEC_CONFIG"

DEFAULT_READ_SIZE = 4096


class GCConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {})
        self.logging = data.get("logging", {})
        self.decoder = data.get("decoder", {})
        self.debug = data.get("debug", False)

    @property
    def read_size(self) -> int:
        size = int(self.decoder.get("read_size", DEFAULT_READ_SIZE))
        return size if size > 0 else DEFAULT_READ_SIZE

    @property
    def log_unhandled_tags(self) -> bool:
        return bool(self.decoder.get("log_unhandled_tags", False))


def load_config(path=None) -> 'GCConfig':
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if path is None and env_path:
        path = Path(env_path)

    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
    else:
        path = CONFIG_PATH
        if not path.exists():
            # Installed without the project tree: run on defaults.
            return GCConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return GCConfig(data)

_config_cache = None

def get_config() -> 'GCConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def reset_config() -> None:
    """Drop the cached configuration so the next ``get_config`` re-reads it."""
    global _config_cache
    _config_cache = None
