from __future__ import annotations

from typing import Any, Iterable, Mapping

from .models import Scene
from .rng import RandomSource


class EmptyCatalog(LookupError):
    """Raised when a random pick is requested from an empty catalog."""


class SceneDatabase:
    def __init__(self, scenes: Iterable[Scene]) -> None:
        self.scenes: dict[str, Scene] = {scene.id: scene for scene in scenes}

    @classmethod
    def from_raw(cls, scenes_raw: Mapping[str, Mapping[str, Any]]) -> "SceneDatabase":
        return cls(Scene.model_validate({"id": key, **payload}) for key, payload in scenes_raw.items())

    def __len__(self) -> int:
        return len(self.scenes)

    def get_all_scenes(self) -> list[Scene]:
        return list(self.scenes.values())

    def get_scene_by_id(self, scene_id: str) -> Scene | None:
        return self.scenes.get(scene_id)

    def choose_random_scene(self, rng: RandomSource) -> Scene:
        keys = list(self.scenes)
        if not keys:
            raise EmptyCatalog("SceneDatabase contains no scenes.")
        return self.scenes[keys[rng.next_int(0, len(keys))]]
