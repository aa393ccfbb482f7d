from __future__ import annotations

"""Typed accessors shared by the section loaders.

Every error names the dotted key path of the offending value, e.g.
``search.field_weights.default must be an integer``.
"""

from typing import Any, Callable, Mapping, TypeVar

T = TypeVar("T")

_NUMBER = (int, float)


def _missing(config_key: str) -> ValueError:
    return ValueError(f"Missing required config: {config_key}")


def _typed(value: Any, expected: type | tuple[type, ...], config_key: str, noun: str) -> Any:
    # bool is an int subclass; it only passes where bool is expected.
    if isinstance(value, bool) and expected is not bool:
        raise TypeError(f"{config_key} must be {noun}")
    if not isinstance(value, expected):
        raise TypeError(f"{config_key} must be {noun}")
    return value


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return one top-level section.

    Optional sections that are absent read as an empty mapping, so their
    loaders fall back to defaults key by key.

    Raises:
        ValueError: If a required section is absent.
        TypeError: If the section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise _missing(key)
        return {}
    return _typed(section, Mapping, key, "an object")


def get_required_value(section: Mapping[str, Any], field: str, config_key: str) -> Any:
    if field not in section:
        raise _missing(config_key)
    return section[field]


def get_optional_value(section: Mapping[str, Any], field: str, default: Any) -> Any:
    return section.get(field, default)


def expect_str(value: Any, config_key: str) -> str:
    return _typed(value, str, config_key, "a string")


def expect_bool(value: Any, config_key: str) -> bool:
    return _typed(value, bool, config_key, "a boolean")


def expect_int(value: Any, config_key: str) -> int:
    return _typed(value, int, config_key, "an integer")


def expect_float(value: Any, config_key: str) -> float:
    """Accept any int or float (but not bool) and return it as float."""
    return float(_typed(value, _NUMBER, config_key, "a number"))


def expect_str_list(value: Any, config_key: str) -> list[str]:
    items = _typed(value, list, config_key, "a list")
    return [expect_str(item, f"{config_key}[{idx}]") for idx, item in enumerate(items)]


def _expect_mapping(value: Any, config_key: str, check: Callable[[Any, str], T]) -> dict[str, T]:
    mapping = _typed(value, Mapping, config_key, "an object")
    out: dict[str, T] = {}
    for key, item in mapping.items():
        if not isinstance(key, str):
            raise TypeError(f"{config_key} keys must be strings")
        out[key] = check(item, f"{config_key}.{key}")
    return out


def expect_str_mapping(value: Any, config_key: str) -> dict[str, str]:
    """Validate a mapping such as ``perspectives.labels``."""
    return _expect_mapping(value, config_key, expect_str)


def expect_int_mapping(value: Any, config_key: str) -> dict[str, int]:
    """Validate a mapping such as ``search.field_weights``."""
    return _expect_mapping(value, config_key, expect_int)
