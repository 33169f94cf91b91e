from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_speech_engine = None
_probed = False


class Pyttsx3Speech:
    def __init__(self, engine):
        self._engine = engine

    def speak(self, text: str) -> None:
        self._engine.say(text)
        self._engine.runAndWait()


def probe_speech():
    """Return the cached speech backend, probing for it on first call.

    Returns ``None`` when pyttsx3 is not installed or has no usable driver.
    """
    global _speech_engine, _probed
    if not _probed:
        _probed = True
        try:
            import pyttsx3

            _speech_engine = Pyttsx3Speech(pyttsx3.init())
            logger.info("Speech backend loaded")
        except Exception as exc:
            logger.debug("Speech backend unavailable: %s", exc)
            _speech_engine = None
    return _speech_engine
