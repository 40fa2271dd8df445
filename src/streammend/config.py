from __future__ import annotations

from dataclasses import fields, replace
from typing import Any, Dict, Mapping, Optional

from .models import LinkMode, RepairOptions


TRUE_VALUES = {"true", "yes", "1", "on"}
FALSE_VALUES = {"false", "no", "0", "off"}


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    return default


def parse_link_mode(value: str) -> LinkMode:
    lowered = value.strip().lower().replace("_", "-")
    for mode in LinkMode:
        if mode.value == lowered:
            return mode
    choices = ", ".join(mode.value for mode in LinkMode)
    raise ValueError(f"Unknown link mode '{value}'; expected one of: {choices}.")


def parse_options(pairs: Mapping[str, str], base: Optional[RepairOptions] = None) -> RepairOptions:
    """Build :class:`RepairOptions` from string ``KEY=VALUE`` pairs.

    Keys are option names, with dashes accepted in place of underscores.
    Boolean values that cannot be read keep the current setting.
    """
    options = base or RepairOptions()
    known = {field.name for field in fields(RepairOptions)}
    updates: Dict[str, Any] = {}
    for raw_key, value in pairs.items():
        key = raw_key.strip().lower().replace("-", "_")
        if key not in known:
            raise KeyError(f"Unknown repair option '{raw_key}'.")
        if key == "link_mode":
            updates[key] = parse_link_mode(value)
        else:
            updates[key] = parse_bool(value, getattr(options, key))
    return replace(options, **updates)
