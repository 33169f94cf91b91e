from __future__ import annotations

from guide_engine.core.keys import KeyPrefix, entity_class, resolve_key
from guide_engine.core.types import EntityRef


def test_resolve_key_composes_prefix_zone_template_and_event():
    ent = EntityRef(hunting_zone_id=9781, template_id=1000)
    assert resolve_key(ent, 1101, KeyPrefix.SKILL) == "s-9781-1000-1101"
    assert resolve_key(ent, 47, KeyPrefix.HEALTH) == "h-9781-1000-47"
    assert resolve_key(ent, 905434, "ab") == "ab-9781-1000-905434"


def test_missing_entity_keys_as_server():
    assert resolve_key(None, 30231000, KeyPrefix.ABNORMALITY_FROM_SERVER) == "ae-0-0-30231000"
    assert resolve_key(EntityRef.ZERO, 30231000, "ae") == "ae-0-0-30231000"
    assert entity_class(None, KeyPrefix.SKILL) == "s-0-0"


def test_resolve_key_is_deterministic():
    ent = EntityRef(hunting_zone_id=3, template_id=4)
    assert resolve_key(ent, 5, KeyPrefix.SKILL) == resolve_key(EntityRef(3, 4), 5, KeyPrefix.SKILL)


def test_distinct_tuples_never_share_a_key():
    tuples = [
        ("s", 1, 23, 4),
        ("s", 12, 3, 4),
        ("s", 1, 2, 34),
        ("s", 12, 34, 0),
        ("am", 1, 23, 4),
        ("ab", 1, 23, 4),
        ("ae", 0, 0, 1234),
        ("h", 1, 23, 4),
    ]
    keys = {resolve_key(EntityRef(zone, template), event_id, prefix) for prefix, zone, template, event_id in tuples}
    assert len(keys) == len(tuples)


def test_location_does_not_affect_key():
    from guide_engine.core.types import Location

    plain = EntityRef(1, 2)
    placed = EntityRef(1, 2, location=Location(5.0, 6.0, 7.0, 1.0))
    assert resolve_key(plain, 9, KeyPrefix.SKILL) == resolve_key(placed, 9, KeyPrefix.SKILL)
