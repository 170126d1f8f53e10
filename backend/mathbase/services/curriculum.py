"""Read-only lesson catalog, loaded once from data/modules.json."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

from mathbase.models.curriculum import Lesson, Module

_CATALOG_PATH = Path(__file__).parent.parent / "data" / "modules.json"


@lru_cache
def list_modules() -> tuple[Module, ...]:
    with open(_CATALOG_PATH, "r", encoding="utf-8") as f:
        raw = json.load(f)
    return tuple(Module.model_validate(m) for m in raw["modules"])


def get_module_by_id(module_id: str) -> Optional[Module]:
    for module in list_modules():
        if module.id == module_id:
            return module
    return None


def get_lesson_by_id(module_id: str, lesson_id: str) -> Optional[Lesson]:
    module = get_module_by_id(module_id)
    if module is None:
        return None
    for lesson in module.lessons:
        if lesson.id == lesson_id:
            return lesson
    return None


def all_lesson_ids() -> list[str]:
    return [lesson.id for m in list_modules() for lesson in m.lessons]
