from __future__ import annotations
from collections.abc import Mapping
from typing import TypeAlias

SettingType: TypeAlias = str | int | float | bool | None

class SettingsError(Exception):
    """Raised when a setting has an unusable value."""
    pass

class SettingsType(dict[str, SettingType]):
    """
    Conversion settings keyed by name, with getters that coerce values given as strings
    (e.g. from the environment) to the expected type
    """
    def __init__(self, settings : Mapping[str,SettingType]|None = None):
        super().__init__(settings or {})

    def get_bool(self, key: str, default: bool|None = False) -> bool:
        value = self.get(key, default)
        if value is None:
            return False

        if isinstance(value, bool):
            return value
        elif isinstance(value, str) and value.lower() in ('true', 'false'):
            return value.lower() == 'true'

        raise SettingsError(f"Cannot convert setting '{key}' with value {value!r} to bool")

    def get_int(self, key: str, default: int|None = None) -> int|None:
        value = self.get(key, default)
        if value is None:
            return None

        try:
            return int(value)
        except ValueError:
            raise SettingsError(f"Cannot convert setting '{key}' with value {value!r} to int")

    def get_float(self, key: str, default: float|None = None) -> float|None:
        value = self.get(key, default)
        if value is None:
            return None

        try:
            return float(value)
        except ValueError:
            raise SettingsError(f"Cannot convert setting '{key}' with value {value!r} to float")

    def get_str(self, key: str, default: str|None = None) -> str|None:
        value = self.get(key, default)
        return None if value is None else str(value)

    def update(self, other=(), /, **kwds) -> None:
        """Update settings, ignoring None values so that defaults are kept"""
        items = dict(other, **kwds)
        super().update({ key: value for key, value in items.items() if value is not None })
