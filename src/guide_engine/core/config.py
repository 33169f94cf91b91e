from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .state import default_debug_flags

logger = logging.getLogger(__name__)


@dataclass
class GuideConfig:
    enabled: bool = True
    debug: dict[str, bool] = field(default_factory=default_debug_flags)
    chat_name: str = "Guide"
    notification_channel: int = 21
    guides_dir: str = "guides"


def config_from_dict(data: dict[str, Any]) -> GuideConfig:
    config = GuideConfig()
    if "enabled" in data:
        config.enabled = bool(data["enabled"])
    debug = data.get("debug")
    if isinstance(debug, dict):
        for flag, value in debug.items():
            if flag not in config.debug:
                logger.warning("Ignoring unknown debug flag in config: %s", flag)
                continue
            config.debug[flag] = bool(value)
    chat_name = data.get("chat-name", data.get("chat_name"))
    if chat_name:
        config.chat_name = str(chat_name)
    channel = data.get("notification-channel", data.get("notification_channel"))
    if isinstance(channel, int) and not isinstance(channel, bool):
        config.notification_channel = channel
    guides_dir = data.get("guides-dir", data.get("guides_dir"))
    if guides_dir:
        config.guides_dir = str(guides_dir)
    return config


def load_config(path: str | Path) -> GuideConfig:
    """Read a JSON config file; a missing file yields the defaults."""
    path = Path(path)
    if not path.exists():
        logger.info("Config %s not found, using defaults", path)
        return GuideConfig()
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"config {path} must be a JSON object")
    config = config_from_dict(data)
    if not Path(config.guides_dir).is_absolute():
        config.guides_dir = str(path.parent / config.guides_dir)
    return config
