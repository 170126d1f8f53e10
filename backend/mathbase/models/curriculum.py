from pydantic import BaseModel
from typing import Literal


class Lesson(BaseModel):
    id: str
    title: str
    description: str
    duration: str
    video_url: str
    type: Literal["video", "exercise", "quiz"] = "video"


class Module(BaseModel):
    id: str
    title: str
    description: str
    icon: str
    color: str
    lessons: list[Lesson]

    @property
    def lesson_ids(self) -> list[str]:
        return [lesson.id for lesson in self.lessons]
