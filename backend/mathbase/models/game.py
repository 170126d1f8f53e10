from pydantic import BaseModel, ConfigDict
from typing import Literal, Optional, Union


Operation = Literal["+", "-", "×", "÷"]
QuestionType = Literal["operand1", "operand2", "operation"]
SequencePattern = Literal["arithmetic", "geometric", "squares", "fibonacci", "primes", "cubes"]
LessonCategory = Literal["fractions", "percentage", "algebra", "equations", "proportion", "functions"]


class ArithmeticQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    num1: int
    num2: int
    operation: Operation
    answer: int
    difficulty: int = 0
    options: Optional[list[int]] = None


class CompleteQuestion(ArithmeticQuestion):
    question_type: QuestionType
    display_text: str
    correct_value: Union[int, str]
    # only set when the operator itself is hidden
    symbol_options: Optional[list[str]] = None


class Sequence(BaseModel):
    model_config = ConfigDict(frozen=True)

    numbers: list[int]
    pattern: SequencePattern
    hidden_index: int
    answer: int
    options: list[int]
    hint: str
    start: int
    step: int
    difficulty: int = 0


class Card(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    label: str
    value: int
    kind: Literal["expression", "value"]


class LessonQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt: str
    options: list[str]
    correct_index: int
    category: LessonCategory
    module_id: str
    kind: str
    explanation: str
    slots: dict[str, int] = {}

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_index]
