"""
Helpers for the nested value maps exchanged between containers.

Values are handled as dicts internally. Lists are read as ``{index: item}``
and decimal string keys are folded to ints, so ``'0'`` and ``0`` address
the same slot.
"""

from typing import Any, Dict, List, Optional, Sequence


def normalize_key(key: Any) -> Any:
    if isinstance(key, str) and key:
        try:
            number = int(key)
        except ValueError:
            return key
        if str(number) == key:
            return number
    return key


def is_mapping_like(value: Any) -> bool:
    return isinstance(value, (dict, list, tuple))


def as_mapping(value: Any) -> Dict[Any, Any]:
    """Shallow dict view of a dict, list or tuple (keys normalized)."""
    if isinstance(value, dict):
        return {normalize_key(k): v for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return dict(enumerate(value))
    raise TypeError(f"Expected dict, list or tuple, got {type(value).__name__}")


def array_merge(a: Any, b: Any) -> Dict[Any, Any]:
    """
    Recursively merge b into a copy of a without renumbering int keys.

    A scalar in b, or a key of a that holds a scalar, is overwritten by b.
    """
    merged = as_mapping(a) if is_mapping_like(a) else {}
    if not is_mapping_like(b):
        return merged
    for key, value in as_mapping(b).items():
        if is_mapping_like(value) and is_mapping_like(merged.get(key)):
            merged[key] = array_merge(merged[key], value)
        elif is_mapping_like(value):
            merged[key] = array_merge({}, value)
        else:
            merged[key] = value
    return merged


def lookup_path(value: Any, path: Sequence[Any], default: Any = None) -> Any:
    """Follow path through nested mappings, default when any step misses."""
    current = value
    for key in path:
        if not is_mapping_like(current):
            return default
        mapping = as_mapping(current)
        key = normalize_key(key)
        if key not in mapping:
            return default
        current = mapping[key]
    return current


def listify(value: Any) -> Any:
    """Turn dicts keyed exactly 0..n-1 into lists, recursively."""
    if isinstance(value, (list, tuple)):
        return [listify(item) for item in value]
    if not isinstance(value, dict):
        return value
    converted = {key: listify(item) for key, item in value.items()}
    if converted and all(isinstance(k, int) for k in converted) \
            and sorted(converted) == list(range(len(converted))):
        return [converted[i] for i in range(len(converted))]
    return converted


def stringify(value: Any) -> str:
    """String form used when comparing against checkbox value attributes."""
    if value is True:
        return '1'
    if value is False or value is None:
        return ''
    return str(value)


def stringified_items(value: Any) -> Optional[List[str]]:
    if not is_mapping_like(value):
        return None
    return [stringify(item) for item in as_mapping(value).values()]
