from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from guide_engine import (
    AbnormalityEvent,
    BossGaugeEvent,
    EntityRef,
    EventKind,
    FileGuideSource,
    GuideConfig,
    Location,
    SkillCastEvent,
    ZoneLoadEvent,
    create_guide_engine,
)

GUIDES = Path(__file__).parent / "guides"


class DemoWorld:
    EMPTY = 0

    def __init__(self):
        self.mobs = {
            "boss-1": EntityRef(hunting_zone_id=9781, template_id=1000, location=Location(1200.0, -340.0, 5.0, 1.57)),
        }

    def lookup_mob(self, entity_id):
        return self.mobs.get(entity_id)

    def is_local_player(self, entity_id):
        return entity_id == "me"

    def empty_source(self):
        return self.EMPTY

    def compute_skill_id(self, event):
        return int(event.skill)


class PrintingSink:
    def spawn_collection(self, game_id, item_id, location):
        print(f"spawn   #{game_id:x} item={item_id} at ({location.x:.0f}, {location.y:.0f})")

    def despawn_collection(self, game_id):
        print(f"despawn #{game_id:x}")

    def play_sound(self, sound_id):
        print(f"sound   {sound_id}")

    def show_event_message(self, message):
        print(f"message {message}")

    def show_chat_notification(self, channel, author_name, message):
        print(f"chat[{channel}] {author_name}: {message}")


class DemoSource:
    def __init__(self):
        self.handlers = {}

    def hook(self, kind, handler):
        self.handlers[kind] = handler

    def emit(self, kind, event):
        self.handlers[kind](event)


def enrage_countdown(text, action, entity):
    for seconds in (3, 2, 1):
        text({"sub_type": "message", "message": f"Enrage in {seconds}", "delay": (3 - seconds) * 1000}, entity)


async def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    config = GuideConfig(guides_dir=str(GUIDES))
    config.debug["skill"] = True
    guides = FileGuideSource(GUIDES, callbacks={"enrage_countdown": enrage_countdown})
    engine = create_guide_engine(DemoWorld(), PrintingSink(), config=config, guides=guides)

    source = DemoSource()
    engine.bind(source)
    source.emit(EventKind.ZONE_LOAD, ZoneLoadEvent(zone=9781))
    source.emit(EventKind.SKILL_CAST, SkillCastEvent(game_id="boss-1", skill=1101, speed=1.25))
    source.emit(EventKind.BOSS_GAUGE, BossGaugeEvent(game_id="boss-1", cur_hp=5000, max_hp=10000))
    source.emit(EventKind.ABNORMALITY_BEGIN, AbnormalityEvent(target="me", id=30231000))
    await asyncio.sleep(4.5)
    print(f"pending timers: {len(engine.timers)}")


if __name__ == "__main__":
    asyncio.run(main())
