"""Structural clone and deep merge of option records."""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping


def _is_record(value: Any) -> bool:
    return isinstance(value, Mapping)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def clone(value: Any) -> Any:
    """Return a structural copy of ``value``.

    Mappings become plain dicts and lists/tuples become lists; every other
    object (strings, numbers, handles) is shared by reference.
    """
    if _is_record(value):
        return {key: clone(item) for key, item in value.items()}
    if _is_sequence(value):
        return [clone(item) for item in value]
    return value


def deep_merge(target: MutableMapping[str, Any], source: Mapping[str, Any] | None) -> MutableMapping[str, Any]:
    """Overlay ``source`` onto ``target`` in place and return ``target``.

    When both sides hold a mapping for a key the two are merged
    recursively. Any other incoming value, sequences included, replaces
    the existing one wholesale. ``source`` is never mutated; values taken
    from it are cloned so the result shares no containers with it.
    """
    if source is None:
        return target
    root = source

    def _merge(into: MutableMapping[str, Any], incoming: Mapping[str, Any]) -> None:
        for key, value in incoming.items():
            if value is root:
                continue
            current = into.get(key)
            if _is_record(value) and isinstance(current, MutableMapping):
                _merge(current, value)
            else:
                into[key] = clone(value)

    _merge(target, source)
    return target


__all__ = ["clone", "deep_merge"]
