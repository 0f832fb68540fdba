from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from . import affinity, year_bias


class GenerationSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    preferred_vehicle_chance: float = Field(default=0.85, ge=0.0, le=1.0)
    hanger_empty_chance: float = Field(default=0.80, ge=0.0, le=1.0)
    hanger_max_items: int = Field(default=3, ge=1)
    hanger_stop_chance: float = Field(default=0.40, ge=0.0, le=1.0)
    seat_under_skip_chance: float = Field(default=0.95, ge=0.0, le=1.0)
    seat_skip_chance: float = Field(default=0.35, ge=0.0, le=1.0)
    default_repeat_chance: float = Field(default=0.25, ge=0.0, le=1.0)
    food_max_age_days: int = Field(default=7, ge=0)
    max_age_days: int = Field(default=439, ge=0)
    year_decay_rate: float = Field(default=year_bias.DECAY_RATE, ge=0.0)
    affinity_match: float = Field(default=affinity.MATCH_MULTIPLIER, ge=0.0)
    affinity_mismatch: float = Field(default=affinity.MISMATCH_MULTIPLIER, ge=0.0)

    def as_dict(self) -> dict[str, Any]:
        return json.loads(self.model_dump_json())


def merge_settings(payload: dict[str, Any] | None) -> GenerationSettings:
    if not isinstance(payload, dict):
        payload = {}
    return GenerationSettings.model_validate(payload)


def load_generation_settings(path: Path | str | None) -> GenerationSettings:
    if path is None:
        return GenerationSettings()
    settings_path = Path(path)
    if not settings_path.exists():
        return GenerationSettings()
    try:
        payload = json.loads(settings_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        payload = {}
    return merge_settings(payload)
