from __future__ import annotations

import re
from dataclasses import dataclass
from html import escape
from typing import Iterable, Mapping, Sequence

from things_left_behind.core.models import GeneratedItem, GeneratedVehicle, LocationLabel

NO_VEHICLE_TEXT = "No vehicle generated."
NO_ITEMS_TEXT = "No items found in vehicle."
EMPTY_LOCATION_TEXT = "<em>Nothing.</em>"

AN_EXCEPTIONS = frozenset({"honest"})
A_EXCEPTIONS = frozenset({"usable", "used"})
PAIR_LIKE_MODES = frozenset({"pair", "set"})

_LOCATION_PREFIX = re.compile(r"^(stor|hang)")
_SEAT_PREFIX = re.compile(r"^seat")
_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


@dataclass(slots=True)
class ItemGroup:
    display_name: str
    state: str
    count: int
    is_bundle: bool
    bundle_mode: str | None


def group_items(items: Iterable[GeneratedItem]) -> list[ItemGroup]:
    groups: dict[tuple, ItemGroup] = {}
    for item in items:
        if item.is_bundle:
            key: tuple = ("BUNDLE", item.display_name, item.state, item.bundle_mode)
        else:
            key = (item.display_name, item.state)
        group = groups.get(key)
        if group is None:
            group = ItemGroup(
                display_name=item.display_name,
                state=item.state,
                count=0,
                is_bundle=item.is_bundle,
                bundle_mode=item.bundle_mode,
            )
            groups[key] = group
        group.count += 1
    # Stable sort: bundles first, otherwise first-seen order.
    return sorted(groups.values(), key=lambda group: not group.is_bundle)


def pluralize(name: str, count: int) -> str:
    if count == 1:
        return name
    if name.endswith("y"):
        return name[:-1] + "ies"
    if name.endswith("s"):
        return name + "es"
    return name + "s"


def indefinite_article(phrase: str | None) -> str:
    if not phrase or not phrase.strip():
        return "a"
    first_word = phrase.strip().lower().split()[0]
    if first_word in AN_EXCEPTIONS:
        return "an"
    if first_word in A_EXCEPTIONS:
        return "a"
    return "an" if first_word[0] in "aeiou" else "a"


def describe_group(group: ItemGroup) -> str:
    name = group.display_name
    state = group.state
    count = group.count
    mode = group.bundle_mode

    if count == 1:
        return f"{indefinite_article(f'{state} {name}')} {state} {name}"

    if not group.is_bundle or not mode:
        return f"{count} {state} {pluralize(name, count)}"

    if mode in PAIR_LIKE_MODES:
        return f"{indefinite_article(mode)} {mode} of {state} {pluralize(name, count)}"

    if count <= 2:
        return f"{count} {state} {pluralize(name, count)}"

    return f"{indefinite_article(mode)} {mode} of {state} {pluralize(name, count)} ({count} in total)"


def join_english(parts: Sequence[str]) -> str:
    if not parts:
        return ""
    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2:
        return f"{parts[0]} and {parts[1]}"
    return ", ".join(parts[:-1]) + ", and " + parts[-1]


def describe_location(items: Iterable[GeneratedItem]) -> str:
    return join_english([describe_group(group) for group in group_items(items)])


def humanize_location(key: str, location_labels: Mapping[str, LocationLabel] | None = None) -> str:
    if location_labels:
        entry = location_labels.get(key)
        if entry is not None and entry.label:
            return entry.label
    text = _LOCATION_PREFIX.sub("", key)
    text = _SEAT_PREFIX.sub("seat ", text)
    text = _CAMEL_BOUNDARY.sub(r" \1", text)
    return " ".join(text.split()).lower()


def _render_header(vehicle: GeneratedVehicle, intro: str) -> list[str]:
    data = vehicle.vehicle
    decade = f"{(vehicle.year // 10) * 10}s"
    color = vehicle.color
    transmission = vehicle.transmission

    overview = (
        f"{escape(intro)}"
        + (f" {indefinite_article(color)} {escape(color)}" if color else "")
        + f" {decade} {escape(data.vehicle_class)} that&rsquo;s been {escape(vehicle.state)}."
    )
    description = (
        "Looking closer, you determine the vehicle is a"
        f" {vehicle.year} {escape(data.make)} {escape(data.model)}"
        + (f" {escape(vehicle.trim)}" if vehicle.trim else "")
        + "."
    )
    peek = (
        "Peeking inside, you can see that it has"
        + (f" {indefinite_article(transmission)} {escape(transmission)}" if transmission else "")
        + " transmission."
    )
    return [
        '<div class="vehicle">'
        f'<div class="vehicleOverview">{overview}</div>'
        '<button class="ctaLook">Look Closer</button>',
        f'<div class="vehicleDescription hidden">{description}</div>'
        '<button class="ctaPeek hidden">Look Inside</button>',
        f'<div class="vehiclePeek hidden">{peek}</div>'
        '<div class="storage hidden">',
    ]


def render_vehicle(
    vehicle: GeneratedVehicle | None,
    location_labels: Mapping[str, LocationLabel] | None = None,
    intro: str = "You see",
) -> str:
    if vehicle is None:
        return NO_VEHICLE_TEXT

    lines = _render_header(vehicle, intro)

    if not vehicle.contents:
        lines.append(NO_ITEMS_TEXT)
        return "\n".join(lines)

    for location, items in vehicle.contents.items():
        body = escape(describe_location(items), quote=False) if items else EMPTY_LOCATION_TEXT
        lines.append(
            f'<div class="location {location}" data-location="{location}">'
            f'<div class="locationName">{escape(humanize_location(location, location_labels))}:</div>'
            f'<div class="locationItems">{body}</div>'
            "</div>"
        )

    lines.append("</div></div>")
    return "\n".join(lines)
