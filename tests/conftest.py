from __future__ import annotations

import pytest

from guide_engine.core.config import GuideConfig
from guide_engine.core.engine import GuideEngine
from guide_engine.core.errors import GuideNotFoundError
from guide_engine.core.guide import GuideTable
from guide_engine.core.timers import TimerRegistry
from guide_engine.core.types import EntityRef, Location
from guide_engine.persistence.sqlalchemy import SQLAlchemyUnitOfWork, open_guide_store


class ManualHandle:
    def __init__(self, loop: "ManualLoop", when: float, delay: float, callback, args, seq: int):
        self._loop = loop
        self.when = when
        self.delay = delay
        self.callback = callback
        self.args = args
        self.seq = seq
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class ManualLoop:
    """Stands in for the asyncio loop: records call_later and fires on advance()."""

    def __init__(self):
        self.time = 0.0
        self.handles: list[ManualHandle] = []
        self.tasks: list = []
        self._seq = 0

    def call_later(self, delay, callback, *args):
        self._seq += 1
        handle = ManualHandle(self, self.time + delay, delay, callback, args, self._seq)
        self.handles.append(handle)
        return handle

    def create_task(self, coro):
        self.tasks.append(coro)
        coro.close()
        return coro

    def run_in_executor(self, executor, func, *args):
        func(*args)
        return None

    def pending(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled()]

    def advance(self, seconds: float) -> None:
        target = self.time + seconds
        while True:
            due = [h for h in self.pending() if h.when <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: (h.when, h.seq))
            self.handles.remove(handle)
            self.time = handle.when
            handle.callback(*handle.args)
        self.handles = self.pending()
        self.time = target

    def run_all(self) -> None:
        while self.pending():
            self.advance(max(h.when for h in self.pending()) - self.time)


class RecordingSink:
    def __init__(self):
        self.calls: list[tuple] = []

    def _record(self, *call):
        self.calls.append(call)

    def spawn_collection(self, game_id, item_id, location):
        self._record("spawn", game_id, item_id, location)

    def despawn_collection(self, game_id):
        self._record("despawn", game_id)

    def play_sound(self, sound_id):
        self._record("sound", sound_id)

    def show_event_message(self, message):
        self._record("message", message)

    def show_chat_notification(self, channel, author_name, message):
        self._record("notification", channel, author_name, message)

    def named(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]


class StubEntities:
    EMPTY = 0
    ME = "me"

    def __init__(self, mobs: dict | None = None):
        self.mobs = dict(mobs or {})

    def lookup_mob(self, entity_id):
        return self.mobs.get(entity_id)

    def is_local_player(self, entity_id):
        return entity_id == self.ME

    def empty_source(self):
        return self.EMPTY

    def compute_skill_id(self, event):
        return int(event.skill)


class StubGuides:
    def __init__(self, guides: dict | None = None):
        self.guides = dict(guides or {})
        self.reloads: list[int] = []

    def load(self, zone_id):
        return self.reload(zone_id)

    def reload(self, zone_id):
        self.reloads.append(zone_id)
        if zone_id not in self.guides:
            raise GuideNotFoundError(zone_id)
        return GuideTable.from_mapping(self.guides[zone_id], zone_id=zone_id)


class StubSpeech:
    def __init__(self):
        self.spoken: list[str] = []

    def speak(self, text):
        self.spoken.append(text)


BOSS_LOCATION = Location(100.0, 200.0, 0.0, 0.0)
BOSS = EntityRef(hunting_zone_id=9781, template_id=1000, location=BOSS_LOCATION)
ADD = EntityRef(hunting_zone_id=9781, template_id=1001, location=Location(0.0, 0.0, 0.0, 0.0))


@pytest.fixture()
def loop():
    return ManualLoop()


@pytest.fixture()
def sink():
    return RecordingSink()


@pytest.fixture()
def timers(loop):
    return TimerRegistry(loop)


@pytest.fixture()
def boss():
    return BOSS


@pytest.fixture()
def entities():
    return StubEntities({"boss": BOSS, "add": ADD})


@pytest.fixture()
def guides():
    return StubGuides()


@pytest.fixture()
def make_engine(loop, sink, entities, guides):
    def _factory(config: GuideConfig | None = None, speech=None) -> GuideEngine:
        return GuideEngine(config or GuideConfig(), entities, sink, guides, speech=speech, loop=loop)

    return _factory


@pytest.fixture()
def session_factory():
    return open_guide_store("sqlite+pysqlite:///:memory:")


@pytest.fixture()
def uow_factory(session_factory):
    def _factory():
        return SQLAlchemyUnitOfWork(session_factory)

    return _factory
