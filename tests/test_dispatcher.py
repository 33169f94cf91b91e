from __future__ import annotations

import logging

import pytest

from guide_engine.core.config import GuideConfig
from guide_engine.core.dispatcher import health_percent
from guide_engine.core.errors import GuideLoadError
from guide_engine.core.types import AbnormalityEvent, BossGaugeEvent, EventKind, SkillCastEvent, ZoneLoadEvent

ZONE = 9781


@pytest.fixture()
def engine(make_engine, guides):
    guides.guides[ZONE] = {
        "s-9781-1000-55": [{"type": "sound", "id": 7}],
        "s-9781-1001-55": [{"type": "text", "sub_type": "message", "message": "add skill", "delay": 1000}],
        "am-9781-1000-4000": [{"type": "text", "sub_type": "message", "message": "from boss"}],
        "ae-0-0-4000": [{"type": "text", "sub_type": "message", "message": "from server"}],
        "ab-9781-1000-4000": [{"type": "text", "sub_type": "message", "message": "on boss"}],
        "h-9781-1000-49": [{"type": "text", "sub_type": "notification", "message": "49%"}],
    }
    engine = make_engine()
    engine.dispatcher.on_zone_load(ZoneLoadEvent(zone=ZONE))
    return engine


def messages(sink):
    return [call[1] for call in sink.named("message")]


def test_skill_cast_schedules_matching_sound(loop, sink, engine):
    scheduled = engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="boss", skill=55))
    assert len(scheduled) == 1
    loop.run_all()
    assert sink.calls == [("sound", 7)]


def test_skill_cast_uses_event_speed(engine):
    guides_table = engine.state.active_guide
    assert "s-9781-1001-55" in guides_table
    [entry] = engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="add", skill=55, speed=2.0))
    assert entry.delay_ms == 500


def test_unknown_mob_or_key_is_silent(sink, engine, loop):
    assert engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="nobody", skill=55)) == []
    assert engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="boss", skill=56)) == []
    loop.run_all()
    assert sink.calls == []


def test_disabled_engine_schedules_nothing(loop, sink, engine):
    engine.state.set_enabled(False)
    assert engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="boss", skill=55)) == []
    assert engine.dispatcher.on_abnormality(AbnormalityEvent(target="boss", id=4000)) == []
    assert engine.dispatcher.on_boss_gauge(BossGaugeEvent(game_id="boss", cur_hp=49, max_hp=100)) == []
    loop.run_all()
    assert sink.calls == []

    engine.state.set_enabled(True)
    assert len(engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="boss", skill=55))) == 1


def test_zone_without_guide_schedules_nothing(sink, engine, loop):
    assert engine.dispatcher.on_zone_load(ZoneLoadEvent(zone=1)) is False
    assert engine.state.guide_found is False
    assert len(engine.state.active_guide) == 0
    assert engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="boss", skill=55)) == []


def test_abnormality_from_boss_on_me(loop, sink, engine):
    engine.dispatcher.on_abnormality(AbnormalityEvent(target="me", source="boss", id=4000))
    loop.run_all()
    assert messages(sink) == ["from boss"]


def test_abnormality_from_server_on_me(loop, sink, engine):
    engine.dispatcher.on_abnormality(AbnormalityEvent(target="me", id=4000))
    loop.run_all()
    assert messages(sink) == ["from server"]


def test_abnormality_on_boss(loop, sink, engine):
    engine.dispatcher.on_abnormality(AbnormalityEvent(target="boss", source="add", id=4000))
    loop.run_all()
    assert messages(sink) == ["on boss"]


def test_abnormality_on_other_player_is_ignored(loop, sink, engine):
    engine.dispatcher.on_abnormality(AbnormalityEvent(target="someone-else", source="boss", id=4000))
    loop.run_all()
    assert sink.calls == []


def test_boss_gauge_uses_floored_percent(loop, sink, engine):
    engine.dispatcher.on_boss_gauge(BossGaugeEvent(game_id="boss", cur_hp=4999, max_hp=10000))
    loop.run_all()
    assert sink.named("notification") == [("notification", 21, "Guide", "49%")]


def test_boss_gauge_with_zero_max_is_ignored(engine):
    assert engine.dispatcher.on_boss_gauge(BossGaugeEvent(game_id="boss", cur_hp=0, max_hp=0)) == []


@pytest.mark.parametrize(
    "cur, total, expected",
    [(100, 100, 100), (0, 100, 0), (4999, 10000, 49), (1, 3, 33), (5, 0, None), (150, 100, 100)],
)
def test_health_percent(cur, total, expected):
    assert health_percent(cur, total) == expected


def test_zone_load_clears_every_pending_timer(loop, sink, engine, guides):
    for _ in range(3):
        engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="add", skill=55))
    engine.executor.text({"sub_type": "message", "message": "later", "delay": 60000, "id": 5})
    assert len(engine.timers) == 4

    engine.dispatcher.on_zone_load(ZoneLoadEvent(zone=ZONE))
    assert len(engine.timers) == 0
    loop.run_all()
    assert sink.calls == []


def test_zone_load_ignores_enabled_flag(engine, guides):
    engine.state.set_enabled(False)
    engine.executor.text({"sub_type": "message", "message": "later", "delay": 1000})
    assert engine.dispatcher.on_zone_load(ZoneLoadEvent(zone=ZONE)) is True
    assert len(engine.timers) == 0
    assert guides.reloads[-1] == ZONE


def test_reload_replaces_table_entirely(loop, sink, engine, guides):
    guides.guides[ZONE] = {"s-9781-1000-66": [{"type": "sound", "id": 8}]}
    engine.dispatcher.on_zone_load(ZoneLoadEvent(zone=ZONE))
    assert engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="boss", skill=55)) == []
    engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="boss", skill=66))
    loop.run_all()
    assert sink.calls == [("sound", 8)]


def test_debug_flags_trace_keys(make_engine, guides, caplog):
    guides.guides[ZONE] = {}
    config = GuideConfig()
    config.debug["skill"] = True
    engine = make_engine(config)
    engine.dispatcher.on_zone_load(ZoneLoadEvent(zone=ZONE))
    caplog.set_level(logging.INFO, logger="guide_engine")
    engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="boss", skill=55))
    assert "Skill: 55 | Started by: s-9781-1000 | key: s-9781-1000-55" in caplog.text


def test_boss_debug_flag_only_traces_boss_templates(make_engine, guides, caplog):
    guides.guides[ZONE] = {}
    config = GuideConfig()
    config.debug["boss"] = True
    engine = make_engine(config)
    engine.dispatcher.on_zone_load(ZoneLoadEvent(zone=ZONE))
    caplog.set_level(logging.INFO, logger="guide_engine")
    engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="add", skill=55))
    assert caplog.text == ""
    engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="boss", skill=55))
    assert "key: s-9781-1000-55" in caplog.text


def test_bind_registers_every_event_kind(engine):
    class Source:
        def __init__(self):
            self.hooks = {}

        def hook(self, kind, handler):
            self.hooks[kind] = handler

    source = Source()
    engine.bind(source)
    assert set(source.hooks) == set(EventKind)
    assert source.hooks[EventKind.ABNORMALITY_BEGIN] == source.hooks[EventKind.ABNORMALITY_REFRESH]


def test_malformed_action_type_does_not_keep_previous_guide(loop, sink, engine, guides):
    guides.guides[2] = {"s-9781-1000-55": [{"type": ["sound"], "id": 7}]}
    assert engine.dispatcher.on_zone_load(ZoneLoadEvent(zone=2)) is True
    assert engine.state.zone_id == 2
    assert engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="boss", skill=55)) == []
    loop.run_all()
    assert sink.calls == []


def test_guide_load_error_falls_back_to_no_guide(loop, sink, engine, guides, caplog):
    caplog.set_level(logging.WARNING)

    def broken(zone_id):
        raise GuideLoadError(zone_id, "store unavailable")

    guides.reload = broken
    engine.executor.text({"sub_type": "message", "message": "pending", "delay": 500})

    assert engine.dispatcher.on_zone_load(ZoneLoadEvent(zone=2)) is False
    assert engine.state.zone_id == 2
    assert engine.state.guide_found is False
    assert len(engine.state.active_guide) == 0
    assert len(engine.timers) == 0
    assert engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="boss", skill=55)) == []
    assert "Guide for zone 2 not loaded" in caplog.text
    loop.run_all()
    assert sink.calls == []


def test_unexpected_source_failure_still_drops_previous_guide(engine, guides):
    def crash(zone_id):
        raise RuntimeError("disk gone")

    guides.reload = crash
    with pytest.raises(RuntimeError):
        engine.dispatcher.on_zone_load(ZoneLoadEvent(zone=3))
    assert engine.state.zone_id == 3
    assert engine.state.guide_found is False
    assert engine.dispatcher.on_skill_cast(SkillCastEvent(game_id="boss", skill=55)) == []
