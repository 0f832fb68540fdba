from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

LocationKind = Literal["storage", "seat", "seat_under", "hanger"]
FOOD_CATEGORY = "consumable_food"
UNKNOWN_STATE = "unknown"


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class SpawnGroup(StrictModel):
    min_count: int | None = Field(default=None, alias="min", ge=1)
    max_count: int | None = Field(default=None, alias="max", ge=1)
    mode: str | None = None

    @model_validator(mode="after")
    def validate_min_max(self) -> "SpawnGroup":
        if self.max_count is not None and self.max_count < self.count_range()[0]:
            raise ValueError("SpawnGroup.max must be greater than or equal to min.")
        return self

    def count_range(self) -> tuple[int, int]:
        min_count = self.min_count if self.min_count is not None else 2
        max_count = self.max_count if self.max_count is not None else min_count
        return min_count, max_count


class Variant(StrictModel):
    type: str = Field(min_length=1)
    com_vari: float = Field(alias="comVari", ge=0)
    start: int | None = None
    end: int | None = None
    spawn_group: SpawnGroup | None = Field(default=None, alias="spawnGroup")

    @model_validator(mode="after")
    def validate_years(self) -> "Variant":
        if self.start is not None and self.end is not None and self.end < self.start:
            raise ValueError(f"Variant '{self.type}' ends before it starts.")
        return self


class ItemState(StrictModel):
    com_state: float = Field(alias="comState", ge=0)
    decay: float | None = Field(default=None, ge=0)
    ord: int | None = None


class Item(StrictModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    size: int = Field(ge=1)
    com_base: float = Field(alias="comBase", ge=0, le=1)
    com_repeat: int | None = Field(default=None, alias="comRepeat", ge=0)
    repeat_chance: float | None = Field(default=None, alias="repeatChance", ge=0, le=1)
    aff_vehicle: list[str] | None = Field(default=None, alias="affVehicle")
    aff_storage: list[str] | None = Field(default=None, alias="affStorage")
    variants: list[Variant] = Field(min_length=1)
    itm_state: dict[str, ItemState] = Field(alias="itmState", min_length=1)

    @property
    def repeatable(self) -> bool:
        # Only an explicit 0 marks an item unique; an undeclared policy repeats.
        return self.com_repeat != 0


class VehicleLocation(StrictModel):
    kind: LocationKind
    capacity: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_capacity(self) -> "VehicleLocation":
        if self.kind == "hanger" and self.capacity:
            raise ValueError("Hanging points do not carry a capacity.")
        return self


class Vehicle(StrictModel):
    id: str = Field(min_length=1)
    type: str = Field(min_length=1)
    make: str = Field(min_length=1)
    model: str = Field(min_length=1)
    vehicle_class: str = Field(alias="class", min_length=1)
    year_start: int = Field(alias="yearStart")
    year_end: int = Field(alias="yearEnd")
    color: dict[str, float] = Field(min_length=1)
    trim: dict[str, float] = Field(default_factory=dict)
    trans: list[str] = Field(default_factory=list)
    locations: dict[str, VehicleLocation] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_years(self) -> "Vehicle":
        if self.year_end < self.year_start:
            raise ValueError(f"Vehicle '{self.id}' yearEnd is before yearStart.")
        return self


class Scene(StrictModel):
    id: str = Field(min_length=1)
    description: str = Field(min_length=1)
    aff_owners: list[str] = Field(default_factory=list, alias="affOwners")
    aff_vehicles: list[str] = Field(default_factory=list, alias="affVehicles")
    state: list[str] = Field(default_factory=list)
    state_bias: dict[str, float] = Field(default_factory=dict, alias="stateBias")

    @property
    def label(self) -> str:
        return " ".join(word[:1].upper() + word[1:] for word in self.description.split(" "))


class LocationLabel(StrictModel):
    label: str = Field(min_length=1)


@dataclass(slots=True)
class GeneratedItem:
    item_id: str
    display_name: str
    variant_type: str
    state: str
    age_days: float
    size: int
    is_bundle: bool = False
    bundle_mode: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class GeneratedVehicle:
    vehicle: Vehicle
    year: int
    color: str
    trim: str | None
    transmission: str | None
    state: str
    scene_id: str
    contents: dict[str, list[GeneratedItem]] = field(default_factory=dict)

    def all_items(self) -> list[GeneratedItem]:
        return [item for items in self.contents.values() for item in items]

    def to_dict(self) -> dict[str, Any]:
        return {
            "vehicle_id": self.vehicle.id,
            "year": self.year,
            "color": self.color,
            "trim": self.trim,
            "transmission": self.transmission,
            "state": self.state,
            "scene_id": self.scene_id,
            "contents": {key: [item.to_dict() for item in items] for key, items in self.contents.items()},
        }
