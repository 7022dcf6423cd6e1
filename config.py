import json
from dataclasses import dataclass, field
from typing import Tuple

import database as db
from errors import ConfigurationError

APP_NAME = "Stock Indicator"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Shows stock quotes in the system tray."

DEFAULT_SYMBOLS = ("AAPL", "GOOG", "MSFT")
DEFAULT_UPDATE_INTERVAL = 60
MIN_UPDATE_INTERVAL = 15
# One day; well below threading.TIMEOUT_MAX
MAX_UPDATE_INTERVAL = 24 * 60 * 60


@dataclass(frozen=True)
class Configuration:
    """Settings handed to the registry and scheduler at construction."""
    symbols: Tuple[str, ...] = field(default=DEFAULT_SYMBOLS)
    update_interval: int = DEFAULT_UPDATE_INTERVAL


def parse_symbols(value):
    """
    Parses a symbol list from a JSON array or a comma/whitespace separated string.

    Symbols are upper-cased and stripped; order and duplicates are kept.
    Raises ConfigurationError when nothing usable is left.
    """
    if value is None:
        raise ConfigurationError("No symbols configured.")
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            try:
                items = json.loads(text)
            except ValueError as e:
                raise ConfigurationError(f"Invalid symbol list {value!r}: {e}") from e
        else:
            items = text.replace(",", " ").split()
    else:
        items = list(value)

    symbols = tuple(str(item).strip().upper() for item in items if str(item).strip())
    if not symbols:
        raise ConfigurationError("The symbol list is empty.")
    return symbols


def parse_interval(value):
    """Parses the update interval in seconds; must be a strictly positive integer of at most MAX_UPDATE_INTERVAL."""
    try:
        interval = int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ConfigurationError(f"Update interval must be a positive integer, got {value!r}.") from e
    if interval <= 0:
        raise ConfigurationError(f"Update interval must be a positive integer, got {interval}.")
    if interval > MAX_UPDATE_INTERVAL:
        raise ConfigurationError(f"Update interval must be at most {MAX_UPDATE_INTERVAL} seconds, got {interval}.")
    return interval


def load_configuration():
    """Reads the configuration from the settings store, recovering bad values with defaults."""
    try:
        symbols = parse_symbols(db.get_setting("symbols"))
    except ConfigurationError as e:
        print(f"[CONFIG] {e} Using default symbols {', '.join(DEFAULT_SYMBOLS)}.")
        symbols = DEFAULT_SYMBOLS

    raw_interval = db.get_setting("update_interval")
    if raw_interval is None:
        interval = DEFAULT_UPDATE_INTERVAL
    else:
        try:
            interval = parse_interval(raw_interval)
        except ConfigurationError as e:
            print(f"[CONFIG] {e} Using {MIN_UPDATE_INTERVAL} seconds.")
            interval = MIN_UPDATE_INTERVAL

    return Configuration(symbols=symbols, update_interval=interval)


def save_configuration(configuration):
    """Writes a configuration back to the settings store."""
    db.save_setting("symbols", json.dumps(list(configuration.symbols)))
    db.save_setting("update_interval", str(configuration.update_interval))
