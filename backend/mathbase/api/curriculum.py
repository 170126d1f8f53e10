from fastapi import APIRouter, HTTPException

from mathbase.api.schemas import LessonResponse, ModuleListResponse
from mathbase.models.curriculum import Module
from mathbase.services import curriculum

router = APIRouter(prefix="/api/curriculum", tags=["curriculum"])


@router.get("/modules", response_model=ModuleListResponse)
async def list_modules():
    """The full lesson catalog."""
    return ModuleListResponse(modules=list(curriculum.list_modules()))


@router.get("/modules/{module_id}", response_model=Module)
async def get_module(module_id: str):
    module = curriculum.get_module_by_id(module_id)
    if module is None:
        raise HTTPException(status_code=404, detail=f"Module {module_id} not found")
    return module


@router.get("/modules/{module_id}/lessons/{lesson_id}", response_model=LessonResponse)
async def get_lesson(module_id: str, lesson_id: str):
    lesson = curriculum.get_lesson_by_id(module_id, lesson_id)
    if lesson is None:
        raise HTTPException(status_code=404, detail=f"Lesson {lesson_id} not found in module {module_id}")
    return LessonResponse(module_id=module_id, lesson=lesson)
