"""Settlement configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import SettlementConfig
from .utils import load_json

CONFIG_PATH = Path(__file__).parent / 'data' / 'settlement_config.json'


@lru_cache(maxsize=1)
def get_config() -> SettlementConfig:
    """
    Load settlement configuration from data/settlement_config.json.

    Configuration is cached after first load.

    Returns:
        SettlementConfig object with validated settings

    Raises:
        FileNotFoundError: If settlement_config.json doesn't exist
        ValueError: If config file has invalid structure

    Example:
        from bloodsheet.config import get_config
        config = get_config()
        print(f"Trash value: {config.default_trash_value}")
    """
    return load_json(CONFIG_PATH, schema=SettlementConfig)


def get_default_trash_value() -> int:
    """Get the trash value used when a match doesn't set one."""
    return get_config().default_trash_value


def get_contest_pots() -> dict[int, int]:
    """Get default par-3 and par-5 contest pots keyed by par."""
    config = get_config()
    return {3: config.default_par3_pot, 5: config.default_par5_pot}


def get_auto_press_deficit() -> int:
    """Get how many points down triggers an automatic press."""
    return get_config().auto_press_deficit


def get_log_dir() -> Path:
    """Get the log directory."""
    return Path(get_config().log_dir)


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
