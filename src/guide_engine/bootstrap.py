from __future__ import annotations

import logging
from pathlib import Path

from .core.config import GuideConfig, load_config
from .core.engine import GuideEngine
from .core.ports import EffectSinkPort, EntityLookupPort, GuideSourcePort, TimerLoopPort
from .core.speech import probe_speech
from .guides.files import FileGuideSource

logger = logging.getLogger(__name__)


def create_guide_engine(
    entities: EntityLookupPort,
    effects: EffectSinkPort,
    *,
    config: GuideConfig | str | Path | None = None,
    guides: GuideSourcePort | None = None,
    loop: TimerLoopPort | None = None,
    speech: bool = True,
) -> GuideEngine:
    """Build a GuideEngine from config, defaulting to file guides and probing speech once."""
    if config is None:
        config = GuideConfig()
    elif not isinstance(config, GuideConfig):
        config = load_config(config)
    if guides is None:
        guides = FileGuideSource(config.guides_dir)
    backend = probe_speech() if speech else None
    logger.debug("Guide engine: guides=%s speech=%s", type(guides).__name__, backend is not None)
    return GuideEngine(config, entities, effects, guides, speech=backend, loop=loop)
