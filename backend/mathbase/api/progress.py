from fastapi import APIRouter, HTTPException

from mathbase.api.schemas import (
    LessonProgress,
    ModuleProgress,
    ProgressResponse,
    ProgressSummary,
    ResetResponse,
)
from mathbase.core.deps import get_progress_service
from mathbase.services import curriculum

router = APIRouter(prefix="/api/progress", tags=["progress"])


def _require_lesson(lesson_id: str) -> None:
    if lesson_id not in curriculum.all_lesson_ids():
        raise HTTPException(status_code=404, detail=f"Lesson {lesson_id} not found")


def _module_progress(module) -> ModuleProgress:
    service = get_progress_service()
    return ModuleProgress(
        module_id=module.id,
        watched=service.watched_count(module.lesson_ids),
        total=len(module.lessons),
        percent=service.module_progress(module.lesson_ids),
    )


@router.get("", response_model=ProgressResponse)
async def get_progress():
    return ProgressResponse(progress=get_progress_service().get_all())


@router.get("/summary", response_model=ProgressSummary)
async def progress_summary():
    service = get_progress_service()
    all_ids = curriculum.all_lesson_ids()
    return ProgressSummary(
        overall_percent=service.overall_progress(),
        watched=service.watched_count(all_ids),
        total=len(all_ids),
        studied_modules=service.studied_modules(),
        modules=[_module_progress(m) for m in curriculum.list_modules()],
    )


@router.put("/lessons/{lesson_id}", response_model=LessonProgress)
async def mark_watched(lesson_id: str):
    _require_lesson(lesson_id)
    return LessonProgress(lesson_id=lesson_id, watched=get_progress_service().mark_watched(lesson_id))


@router.delete("/lessons/{lesson_id}", response_model=LessonProgress)
async def mark_unwatched(lesson_id: str):
    _require_lesson(lesson_id)
    return LessonProgress(lesson_id=lesson_id, watched=get_progress_service().mark_unwatched(lesson_id))


@router.post("/lessons/{lesson_id}/toggle", response_model=LessonProgress)
async def toggle_watched(lesson_id: str):
    _require_lesson(lesson_id)
    return LessonProgress(lesson_id=lesson_id, watched=get_progress_service().toggle_watched(lesson_id))


@router.get("/modules/{module_id}", response_model=ModuleProgress)
async def module_progress(module_id: str):
    module = curriculum.get_module_by_id(module_id)
    if module is None:
        raise HTTPException(status_code=404, detail=f"Module {module_id} not found")
    return _module_progress(module)


@router.delete("", response_model=ResetResponse)
async def reset_progress():
    get_progress_service().reset()
    return ResetResponse()
