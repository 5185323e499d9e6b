"""Configuration management for Anoto."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.page import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

ANOTO_HOME = Path(os.environ.get("ANOTO_HOME", Path.home() / "anoto"))
CONFIG_FILE = ANOTO_HOME / "config" / "anoto.conf"
DATA_DIR = ANOTO_HOME / "data" / "entries"

DEFAULT_REMINDER_INTERVAL = 60
NOTIFIERS = ("console", "telegram")
COMPLETION_CUES = ("bell", "none")


@dataclass
class Config:
    """Anoto configuration."""

    data_dir: str = ""
    timezone: str = ""
    page_size: int = DEFAULT_PAGE_SIZE
    reminder_interval: int = DEFAULT_REMINDER_INTERVAL
    notifier: str = "console"
    completion_cue: str = "bell"
    # Telegram notifier settings
    telegram_bot_token: str = ""
    telegram_chat_ids: list[int] = field(default_factory=list)

    @property
    def entries_dir(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _parse_positive_int(key: str, value: str, default: int) -> int:
    try:
        number = int(value)
    except ValueError:
        logger.warning(f"Invalid {key.upper()} value {value!r}, using {default}")
        return default
    if number <= 0:
        logger.warning(f"{key.upper()} must be positive, using {default}")
        return default
    return number


def _parse_choice(key: str, value: str, choices: tuple[str, ...], default: str) -> str:
    value = value.lower()
    if value not in choices:
        logger.warning(f"Unknown {key.upper()} {value!r}, expected one of {', '.join(choices)}")
        return default
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from anoto.conf file."""
    config = Config()
    config_file = path or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Handle quoted values with inline comments: "value" # comment
        if value[:1] in ('"', "'"):
            quote = value[0]
            end_quote = value.find(quote, 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif "#" in value:
            value = value.split("#")[0].strip()

        match key:
            case "data_dir":
                config.data_dir = value
            case "timezone":
                config.timezone = value
            case "page_size":
                config.page_size = _parse_positive_int(key, value, DEFAULT_PAGE_SIZE)
            case "reminder_interval":
                config.reminder_interval = _parse_positive_int(key, value, DEFAULT_REMINDER_INTERVAL)
            case "notifier":
                config.notifier = _parse_choice(key, value, NOTIFIERS, "console")
            case "completion_cue":
                config.completion_cue = _parse_choice(key, value, COMPLETION_CUES, "bell")
            case "telegram_bot_token":
                config.telegram_bot_token = value
            case "telegram_chat_ids":
                chat_ids = []
                for item in value.split(","):
                    item = item.strip()
                    if not item:
                        continue
                    try:
                        chat_ids.append(int(item))
                    except ValueError:
                        logger.warning(f"Ignoring invalid Telegram chat id: {item!r}")
                config.telegram_chat_ids = chat_ids
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
