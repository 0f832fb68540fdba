"""Core found-vehicle generation modules."""

from .generator import GenerationContext, ItemTracker, VehicleGenerator
from .loader import ContentBundle, ContentValidationError, load_content
from .models import GeneratedItem, GeneratedVehicle, Item, Scene, Variant, Vehicle, VehicleLocation
from .rng import DeterministicRNG, EmptyDistribution, RandomSource, choose, roll
from .scenes import EmptyCatalog, SceneDatabase
from .settings import GenerationSettings, load_generation_settings
from .world_time import WorldTime

__all__ = [
    "ContentBundle",
    "ContentValidationError",
    "DeterministicRNG",
    "EmptyCatalog",
    "EmptyDistribution",
    "GeneratedItem",
    "GeneratedVehicle",
    "GenerationContext",
    "GenerationSettings",
    "Item",
    "ItemTracker",
    "RandomSource",
    "Scene",
    "SceneDatabase",
    "Variant",
    "Vehicle",
    "VehicleGenerator",
    "VehicleLocation",
    "WorldTime",
    "choose",
    "load_content",
    "load_generation_settings",
    "roll",
]
