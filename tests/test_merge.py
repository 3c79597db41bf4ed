from __future__ import annotations

import copy

from src.core.defaults import DEFAULTS, get_defaults
from src.core.merge import clone, deep_merge


def test_nested_records_are_merged_with_user_values_winning():
    target = {"sphereCorrection": {"pan": 0, "tilt": 0, "roll": 0}, "minFov": 30}
    deep_merge(target, {"sphereCorrection": {"tilt": 1}})
    assert target == {"sphereCorrection": {"pan": 0, "tilt": 1, "roll": 0}, "minFov": 30}


def test_new_keys_are_added():
    target = {"lang": {"zoom": "Zoom"}}
    deep_merge(target, {"lang": {"custom": "Custom"}, "extra": 1})
    assert target == {"lang": {"zoom": "Zoom", "custom": "Custom"}, "extra": 1}


def test_sequences_are_replaced_not_concatenated():
    target = {"navbar": ["zoom", "caption"]}
    deep_merge(target, {"navbar": ["fullscreen"]})
    assert target["navbar"] == ["fullscreen"]


def test_scalar_replaces_record_and_record_replaces_scalar():
    target = {"keyboard": {"ArrowUp": "x"}, "navbar": False}
    deep_merge(target, {"keyboard": False, "navbar": {"odd": True}})
    assert target == {"keyboard": False, "navbar": {"odd": True}}


def test_user_input_is_not_mutated_or_shared():
    user = {"latitudeRange": [1, -1], "lang": {"zoom": "Zoomen"}}
    snapshot = copy.deepcopy(user)
    target = get_defaults()
    deep_merge(target, user)

    target["latitudeRange"].append(5)
    target["lang"]["zoom"] = "changed"

    assert user == snapshot


def test_handles_are_kept_by_reference():
    handle = object()
    target = get_defaults()
    deep_merge(target, {"container": handle})
    assert target["container"] is handle


def test_self_reference_is_ignored():
    user: dict = {"minFov": 40}
    user["loop"] = user
    target = {"minFov": 30}
    deep_merge(target, user)
    assert target == {"minFov": 40}


def test_none_source_leaves_target_untouched():
    target = {"a": 1}
    assert deep_merge(target, None) == {"a": 1}


def test_clone_thaws_frozen_defaults():
    cloned = clone(DEFAULTS)
    assert isinstance(cloned, dict)
    assert isinstance(cloned["navbar"], list)
    assert isinstance(cloned["lang"]["pleaseRotate"], list)
    cloned["lang"]["zoom"] = "other"
    assert DEFAULTS["lang"]["zoom"] == "Zoom"
