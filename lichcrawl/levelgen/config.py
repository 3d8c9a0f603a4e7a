import os
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

ENV_PREFIX = "LEVELGEN_"
MIN_DIMENSION = 24
_FALSEY = {"0", "false", "no", "off", ""}


@dataclass
class LevelGenConfig:
    width: int = 64
    height: int = 64
    room_attempts: int = 50
    transform_attempts: int = 5
    p_connect: float = 0.5
    widen_organic_corridors: bool = True
    spawn_distance_percent: int = 80
    start_search_attempts: int = 4096
    monster_count: int = 19
    monster_min_distance: int = 10
    monster_spawn_attempts: int = 4096
    door_chance: float = 0.5
    max_generation_attempts: int = 8

    def __post_init__(self):
        if self.width < MIN_DIMENSION or self.height < MIN_DIMENSION:
            raise ValueError(
                f"level must be at least {MIN_DIMENSION}x{MIN_DIMENSION}, got {self.width}x{self.height}"
            )
        if not 0 < self.spawn_distance_percent <= 100:
            raise ValueError(f"spawn_distance_percent out of range: {self.spawn_distance_percent}")
        for name in ("p_connect", "door_chance"):
            val = getattr(self, name)
            if not 0.0 <= val <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {val}")
        for name in (
            "room_attempts",
            "transform_attempts",
            "start_search_attempts",
            "monster_spawn_attempts",
            "max_generation_attempts",
        ):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be positive")
        if self.monster_count < 0 or self.monster_min_distance < 0:
            raise ValueError("monster settings must be non-negative")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], **overrides) -> "LevelGenConfig":
        """Build a config from ``LEVELGEN_<FIELD>`` keys (env vars or Flask config).

        String values are coerced to the field's type; explicit ``overrides``
        win over the mapping.
        """
        values = {}
        for f in fields(cls):
            key = ENV_PREFIX + f.name.upper()
            if key in mapping:
                values[f.name] = _coerce(f.type, mapping[key], key)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @classmethod
    def from_env(cls, **overrides) -> "LevelGenConfig":
        return cls.from_mapping(os.environ, **overrides)

    def to_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _coerce(type_name: Any, raw: Any, key: Optional[str] = None):
    name = type_name if isinstance(type_name, str) else getattr(type_name, "__name__", str(type_name))
    if name == "bool":
        if isinstance(raw, bool):
            return raw
        return str(raw).strip().lower() not in _FALSEY
    try:
        if name == "int":
            return int(raw)
        if name == "float":
            return float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"invalid value for {key}: {raw!r}") from None
    return raw


__all__ = ["LevelGenConfig", "ENV_PREFIX", "MIN_DIMENSION"]
