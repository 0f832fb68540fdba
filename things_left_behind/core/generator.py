from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .affinity import apply_storage_affinity, apply_vehicle_affinity
from .loader import ContentBundle
from .models import (
    FOOD_CATEGORY,
    UNKNOWN_STATE,
    GeneratedItem,
    GeneratedVehicle,
    Item,
    Scene,
    Variant,
    Vehicle,
    VehicleLocation,
)
from .rng import RandomSource, choose, choose_safe, pick_uniform, roll
from .settings import GenerationSettings
from .storage import capacity_points
from .world_time import WorldTime
from .year_bias import multiplier as year_multiplier

logger = logging.getLogger("things_left_behind.generator")


@dataclass(slots=True)
class ItemTracker:
    present: bool
    placements: int = 0


@dataclass(slots=True)
class GenerationContext:
    """Per-call scratch state shared by every location of one vehicle."""

    vehicle: Vehicle
    trackers: dict[str, ItemTracker] = field(default_factory=dict)

    def is_present(self, item_id: str) -> bool:
        tracker = self.trackers.get(item_id)
        return tracker is not None and tracker.present

    def placements(self, item_id: str) -> int:
        tracker = self.trackers.get(item_id)
        return tracker.placements if tracker else 0

    def record_placement(self, item_id: str) -> None:
        tracker = self.trackers.setdefault(item_id, ItemTracker(present=True))
        tracker.placements += 1


@dataclass(frozen=True, slots=True)
class StateRoll:
    state: str
    age_days: float


class VehicleGenerator:
    def __init__(
        self,
        content: ContentBundle,
        world_time: WorldTime,
        rng: RandomSource,
        scene: Scene | None = None,
        settings: GenerationSettings | None = None,
    ) -> None:
        self.content = content
        self.world_time = world_time
        self.rng = rng
        self.scene = scene
        self.settings = settings or GenerationSettings()

    # Variant + state selection

    def choose_variant(self, item: Item, vehicle: Vehicle) -> Variant | None:
        weighted: dict[int, float] = {}
        for idx, variant in enumerate(item.variants):
            # A variant discontinued before the vehicle existed can never be inside it.
            if variant.end is not None and vehicle.year_start > variant.end:
                continue
            weight = variant.com_vari * year_multiplier(
                self.world_time.apocalypse_year,
                variant.start,
                variant.end,
                decay_rate=self.settings.year_decay_rate,
            )
            if weight > 0:
                weighted[idx] = weight

        if not weighted:
            return None
        return item.variants[choose(self.rng, weighted)]

    def choose_state_with_decay(self, item: Item, elapsed_days: float) -> StateRoll:
        initial_state = choose(self.rng, {name: state.com_state for name, state in item.itm_state.items()})

        if item.category == FOOD_CATEGORY:
            age = self.rng.next_int(0, self.settings.food_max_age_days + 1)
        else:
            age = self.rng.next_int(0, self.settings.max_age_days + 1)
        age_days = age + elapsed_days

        if item.itm_state[initial_state].decay is None:
            return StateRoll(state=initial_state, age_days=age_days)

        decay_states = sorted(
            (
                (name, state)
                for name, state in item.itm_state.items()
                if state.decay is not None and state.ord is not None
            ),
            key=lambda entry: entry[1].ord,
        )
        final_state = initial_state
        for name, state in decay_states:
            if age_days >= state.decay:
                final_state = name
        return StateRoll(state=final_state, age_days=age_days)

    def _spawn_records(self, item: Item, variant: Variant) -> list[GeneratedItem]:
        rolled = self.choose_state_with_decay(item, self.world_time.get_elapsed_days())

        spawn_count = 1
        group = variant.spawn_group
        if group is not None:
            min_count, max_count = group.count_range()
            spawn_count = self.rng.next_int(min_count, max_count + 1)

        return [
            GeneratedItem(
                item_id=item.id,
                display_name=f"{variant.type} {item.name}",
                variant_type=variant.type,
                state=rolled.state,
                age_days=rolled.age_days,
                size=item.size,
                is_bundle=group is not None,
                bundle_mode=group.mode if group is not None else None,
            )
            for _ in range(spawn_count)
        ]

    # Scene + vehicle selection

    def choose_scene(self) -> Scene:
        return self.content.scene_db.choose_random_scene(self.rng)

    def choose_vehicle(self, scene: Scene) -> Vehicle | None:
        preferred: list[Vehicle] = []
        fallback: list[Vehicle] = []
        for vehicle in self.content.vehicles:
            if vehicle.year_start > self.world_time.apocalypse_year:
                continue
            if vehicle.type in scene.aff_vehicles:
                preferred.append(vehicle)
            else:
                fallback.append(vehicle)

        if preferred and self.rng.next_float() < self.settings.preferred_vehicle_chance:
            return pick_uniform(self.rng, preferred)
        return pick_uniform(self.rng, fallback)

    def choose_model_year(self, vehicle: Vehicle) -> int:
        max_year = min(vehicle.year_end, self.world_time.apocalypse_year)
        return self.rng.next_int(vehicle.year_start, max_year + 1)

    # Locations

    def _allowed_again(self, item: Item, ctx: GenerationContext) -> bool:
        return ctx.placements(item.id) == 0 or item.repeatable

    def populate_hanger(self, hanger_key: str, ctx: GenerationContext) -> list[GeneratedItem]:
        results: list[GeneratedItem] = []
        if self.rng.next_float() < self.settings.hanger_empty_chance:
            return results

        max_items = self.rng.next_int(1, self.settings.hanger_max_items + 1)
        for item in self.content.items:
            if len(results) >= max_items:
                break
            if not self._allowed_again(item, ctx):
                continue
            if not ctx.is_present(item.id):
                continue
            if not item.aff_storage or hanger_key not in item.aff_storage:
                continue

            variant = self.choose_variant(item, ctx.vehicle)
            if variant is None:
                continue

            results.extend(self._spawn_records(item, variant))
            ctx.record_placement(item.id)

            if self.rng.next_float() < self.settings.hanger_stop_chance:
                break

        return results

    def populate_storage_location(
        self,
        storage_key: str,
        location: VehicleLocation,
        ctx: GenerationContext,
    ) -> list[GeneratedItem]:
        results: list[GeneratedItem] = []

        if location.kind == "seat_under" and self.rng.next_float() < self.settings.seat_under_skip_chance:
            return results
        if location.kind == "seat" and self.rng.next_float() < self.settings.seat_skip_chance:
            return results

        remaining = capacity_points(location.capacity)
        fullness = self.rng.next_float()
        vehicle = ctx.vehicle

        for item in self.content.items:
            prior = ctx.placements(item.id)
            if not self._allowed_again(item, ctx):
                continue
            if not ctx.is_present(item.id):
                continue
            item_points = capacity_points(item.size)
            if item_points > remaining:
                continue

            weight = apply_vehicle_affinity(
                item.com_base,
                item.aff_vehicle,
                vehicle.type,
                match=self.settings.affinity_match,
                mismatch=self.settings.affinity_mismatch,
            )
            weight = apply_storage_affinity(
                weight,
                item.aff_storage,
                storage_key,
                match=self.settings.affinity_match,
                mismatch=self.settings.affinity_mismatch,
            )

            if prior > 0:
                repeat_chance = (
                    item.repeat_chance if item.repeat_chance is not None else self.settings.default_repeat_chance
                )
                if self.rng.next_float() > repeat_chance:
                    continue

            # Weights past 1.0 clamp to a certain spawn.
            if not roll(self.rng, weight):
                continue

            variant = self.choose_variant(item, vehicle)
            if variant is None:
                continue

            results.extend(self._spawn_records(item, variant))
            remaining -= item_points
            ctx.record_placement(item.id)

            if self.rng.next_float() > fullness:
                break

        return results

    # Entry point

    def _roll_presence(self, vehicle: Vehicle) -> GenerationContext:
        ctx = GenerationContext(vehicle=vehicle)
        for item in self.content.items:
            ctx.trackers[item.id] = ItemTracker(present=self.rng.next_float() < item.com_base)
        logger.debug(
            "Presence roll: %d of %d items eligible.",
            sum(1 for tracker in ctx.trackers.values() if tracker.present),
            len(ctx.trackers),
        )
        return ctx

    def generate_single_vehicle(self) -> GeneratedVehicle | None:
        scene = self.scene if self.scene is not None else self.choose_scene()
        vehicle = self.choose_vehicle(scene)
        if vehicle is None:
            logger.info("No vehicle available for scene '%s'.", scene.id)
            return None

        year = self.choose_model_year(vehicle)
        color = choose(self.rng, vehicle.color)
        trim = choose(self.rng, vehicle.trim) if vehicle.trim else None
        transmission = pick_uniform(self.rng, vehicle.trans)
        state = choose_safe(self.rng, scene.state_bias) or UNKNOWN_STATE

        generated = GeneratedVehicle(
            vehicle=vehicle,
            year=year,
            color=color,
            trim=trim,
            transmission=transmission,
            state=state,
            scene_id=scene.id,
            contents={key: [] for key in vehicle.locations},
        )

        ctx = self._roll_presence(vehicle)
        for key, location in vehicle.locations.items():
            if location.kind == "hanger":
                items = self.populate_hanger(key, ctx)
            else:
                items = self.populate_storage_location(key, location, ctx)
            generated.contents[key] = items
            logger.debug("Location '%s' received %d item record(s).", key, len(items))

        logger.info(
            "Generated %d %s %s (%s) in scene '%s' with %d item record(s).",
            year,
            vehicle.make,
            vehicle.model,
            state,
            scene.id,
            len(generated.all_items()),
        )
        return generated
