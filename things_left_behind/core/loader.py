from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from .models import Item, LocationLabel, Scene, Vehicle
from .scenes import SceneDatabase

T = TypeVar("T")


class ContentValidationError(ValueError):
    def __init__(self, message: str, details: list[str] | None = None) -> None:
        self.details = details or []
        suffix = "\n".join(self.details)
        super().__init__(f"{message}\n{suffix}" if suffix else message)


@dataclass(slots=True)
class ContentBundle:
    items: list[Item]
    vehicles: list[Vehicle]
    scenes: list[Scene]
    item_by_id: dict[str, Item]
    vehicle_by_id: dict[str, Vehicle]
    scene_db: SceneDatabase
    location_labels: dict[str, LocationLabel] = field(default_factory=dict)

    @classmethod
    def from_models(
        cls,
        items: list[Item],
        vehicles: list[Vehicle],
        scenes: list[Scene],
        location_labels: dict[str, LocationLabel] | None = None,
    ) -> "ContentBundle":
        return cls(
            items=items,
            vehicles=vehicles,
            scenes=scenes,
            item_by_id={item.id: item for item in items},
            vehicle_by_id={vehicle.id: vehicle for vehicle in vehicles},
            scene_db=SceneDatabase(scenes),
            location_labels=dict(location_labels or {}),
        )


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ContentValidationError(f"Missing content file: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ContentValidationError(f"Invalid JSON in {path.name}: {exc.msg} at line {exc.lineno}") from exc


def _validate_with(path: Path, data: Any, adapter: TypeAdapter) -> Any:
    try:
        return adapter.validate_python(data)
    except ValidationError as exc:
        errors = []
        for issue in exc.errors():
            issue_path = ".".join(str(part) for part in issue.get("loc", [])) or "(root)"
            errors.append(f"{path.name}:{issue_path}: {issue.get('msg', 'validation error')}")
        raise ContentValidationError(f"Schema validation failed for {path.name}.", errors) from exc


def _load_typed_list(path: Path, item_type: type[T]) -> list[T]:
    return _validate_with(path, _load_json(path), TypeAdapter(list[item_type]))  # type: ignore[valid-type]


def _load_location_labels(path: Path) -> dict[str, LocationLabel]:
    if not path.exists():
        return {}
    return _validate_with(path, _load_json(path), TypeAdapter(dict[str, LocationLabel]))


def _assert_unique_ids(kind: str, values: list[Any]) -> None:
    seen: set[str] = set()
    for entry in values:
        entry_id = entry.id
        if entry_id in seen:
            raise ContentValidationError(f"Duplicate {kind} id '{entry_id}'.")
        seen.add(entry_id)


def _assert_ref(exists: bool, message: str) -> None:
    if not exists:
        raise ContentValidationError(message)


def _validate_references(items: list[Item], vehicles: list[Vehicle], scenes: list[Scene]) -> None:
    vehicle_types = {vehicle.type for vehicle in vehicles}
    location_keys = {key for vehicle in vehicles for key in vehicle.locations}

    for scene in scenes:
        for idx, vehicle_type in enumerate(scene.aff_vehicles):
            _assert_ref(
                vehicle_type in vehicle_types,
                f"scene '{scene.id}' affVehicles[{idx}] references unknown vehicle type '{vehicle_type}'.",
            )

    for item in items:
        for idx, location_key in enumerate(item.aff_storage or []):
            _assert_ref(
                location_key in location_keys,
                f"item '{item.id}' affStorage[{idx}] references unknown location '{location_key}'.",
            )


def load_content(content_dir: Path | str) -> ContentBundle:
    base_path = Path(content_dir)
    items = _load_typed_list(base_path / "items.json", Item)
    vehicles = _load_typed_list(base_path / "vehicles.json", Vehicle)
    scenes = _load_typed_list(base_path / "scenes.json", Scene)
    location_labels = _load_location_labels(base_path / "locations.json")

    _assert_unique_ids("item", items)
    _assert_unique_ids("vehicle", vehicles)
    _assert_unique_ids("scene", scenes)

    _validate_references(items, vehicles, scenes)

    return ContentBundle.from_models(items, vehicles, scenes, location_labels)
