from __future__ import annotations


class GuideError(Exception):
    """Base class for guide related failures."""


class GuideNotFoundError(GuideError):
    def __init__(self, zone_id):
        super().__init__(f"no guide for zone {zone_id}")
        self.zone_id = zone_id


class GuideLoadError(GuideError):
    def __init__(self, zone_id, reason: str):
        super().__init__(f"guide for zone {zone_id} failed to load: {reason}")
        self.zone_id = zone_id
        self.reason = reason


class InvalidActionError(GuideError):
    pass


class UnknownDebugFlagError(KeyError):
    def __init__(self, flag: str):
        super().__init__(flag)
        self.flag = flag
