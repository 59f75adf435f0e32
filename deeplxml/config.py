import copy
import json
import os
from pathlib import Path
from typing import Dict, Any, Optional

from deeplxml.logger import get_logger

logger = get_logger(__name__)

# Connection defaults
DEFAULT_TIMEOUT = 8.0  # Connect timeout in seconds
DEEPL_API_URL = "https://api.deepl.com/v2/translate"
DEEPL_FREE_API_URL = "https://api-free.deepl.com/v2/translate"
FREE_KEY_SUFFIX = ":fx"

# Environment overrides
CONFIG_ENV_VAR = "DEEPLXML_CONFIG"
API_KEY_ENV_VAR = "DEEPL_API_KEY"

CACHE_BACKENDS = ["memory", "sqlite"]

# Get base directory (project root)
BASE_DIR = Path(__file__).parent.parent
CONFIG_DIR = BASE_DIR / "config"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Default configuration template
DEFAULT_CONFIG = {
    "deepl": {
        "api_key": "YOUR_API_KEY_HERE",
        "api_url": "",  # Empty: derived from the key (free or pro endpoint)
        "timeout": DEFAULT_TIMEOUT,
        "proxy": "",
        "request_debug": False
    },
    "cache": {
        "backend": "memory",
        "path": str(BASE_DIR / "cache" / "deeplxml-cache.db")
    },
    "log_mode": "off",
    "log_dir": ""
}


def get_config_file() -> Path:
    """Resolve the config file path, honouring the environment override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return CONFIG_FILE


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge overrides into a copy of defaults."""
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def ensure_config_directory(config_file: Optional[Path] = None):
    """Ensure the config directory exists."""
    config_file = config_file or get_config_file()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    logger.debug(f"Config directory ensured: {config_file.parent}")


def create_default_config(config_file: Optional[Path] = None):
    """Create the default config.json file."""
    config_file = config_file or get_config_file()
    ensure_config_directory(config_file)
    with open(config_file, 'w', encoding='utf-8') as f:
        json.dump(DEFAULT_CONFIG, f, indent=4, ensure_ascii=False)
    logger.info(f"Created default config file: {config_file}")


def load_config(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the configuration.

    Values from the config file are merged over DEFAULT_CONFIG, so a partial
    file only needs the keys it changes. A missing or corrupt file falls back
    to the defaults. The DEEPL_API_KEY environment variable takes precedence
    over an unconfigured key.
    """
    config_file = config_file or get_config_file()
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                stored = json.load(f)
            if isinstance(stored, dict):
                config = _merge(DEFAULT_CONFIG, stored)
                logger.debug(f"Configuration loaded from {config_file}")
            else:
                logger.warning(f"Ignoring config file {config_file}: top level is not an object")
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse config file {config_file}: {e}")
            logger.warning("Using default configuration")
        except OSError as e:
            logger.error(f"Failed to read config file {config_file}: {e}")
            logger.warning("Using default configuration")

    env_key = os.environ.get(API_KEY_ENV_VAR)
    if env_key and not is_api_key_configured(config['deepl'].get('api_key', '')):
        config['deepl']['api_key'] = env_key

    return config


def save_config(config: Dict[str, Any], config_file: Optional[Path] = None):
    """Save the configuration to the config file."""
    config_file = config_file or get_config_file()
    try:
        ensure_config_directory(config_file)
        with open(config_file, 'w', encoding='utf-8') as f:
            json.dump(config, f, indent=4, ensure_ascii=False)
        logger.info(f"Configuration saved to {config_file}")
    except OSError as e:
        logger.error(f"Failed to save config to {config_file}: {e}")
        raise


def is_api_key_configured(api_key: str) -> bool:
    return bool(api_key) and api_key != "YOUR_API_KEY_HERE"


def resolve_api_url(api_key: str, api_url: str = "") -> str:
    """
    Pick the DeepL endpoint for a key.

    An explicit URL always wins. Otherwise keys of the free plan (suffixed
    with ":fx") go to the free endpoint and all others to the pro endpoint.
    """
    if api_url:
        return api_url
    if api_key.endswith(FREE_KEY_SUFFIX):
        return DEEPL_FREE_API_URL
    return DEEPL_API_URL
