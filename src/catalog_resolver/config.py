"""Resolver thresholds and cache settings with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


@dataclass(frozen=True)
class ResolverSettings:
    auto_select_threshold: float = 0.90
    strong_threshold: float = 0.75
    suggestion_threshold: float = 0.50
    fuzzy_distance_threshold: float = 0.40
    max_suggestions: int = 5
    cache_ttl_seconds: float = 3600.0
    similarity_hard_cap: int = 50
    name_weight: float = 1.0
    alias_weight: float = 0.8
    min_match_length: int = 2
    unvalidated_penalty: float = 0.5
    default_confidence: float = 0.7

    @classmethod
    def from_env(cls, prefix: str = "CATALOG_RESOLVER_") -> "ResolverSettings":
        defaults = cls()
        overrides: dict[str, float | int] = {}
        for entry in fields(cls):
            env_name = f"{prefix}{entry.name.upper()}"
            current = getattr(defaults, entry.name)
            if isinstance(current, int):
                overrides[entry.name] = _env_int(env_name, current)
            else:
                overrides[entry.name] = _env_float(env_name, current)
        return cls(**overrides)


DEFAULT_SETTINGS = ResolverSettings()
