"""Read-only game registry: maps game_id to contract instance."""

import logging
import random

from mathbase.core.config import get_settings
from mathbase.models.stats import UnknownGameError

from .base import GameContract
from .complete import CompleteContract
from .lesson_challenge import LessonChallengeContract
from .memory import MemoryContract
from .multiple_choice import MultipleChoiceContract
from .quiz import QuizContract
from .sequence import SequenceContract
from .time_attack import TimeAttackContract

logger = logging.getLogger("mathbase.registry")

MAX_REGENERATIONS = 3


def _build_registry() -> dict[str, GameContract]:
    attempts = get_settings().max_distractor_attempts
    return {
        "quiz": QuizContract(),
        "multipleChoice": MultipleChoiceContract(max_attempts=attempts),
        "complete": CompleteContract(),
        "sequence": SequenceContract(max_attempts=attempts),
        "memory": MemoryContract(),
        "timeAttack": TimeAttackContract(max_attempts=attempts),
        "lessonChallenge": LessonChallengeContract(),
    }


GAME_REGISTRY = _build_registry()

# games whose rounds are a single question drawn from a difficulty level
QUESTION_GAMES = ("quiz", "multipleChoice", "complete", "sequence", "timeAttack")


def get_contract(game_id: str) -> GameContract:
    try:
        return GAME_REGISTRY[game_id]
    except KeyError:
        raise UnknownGameError(game_id) from None


def generate_round(game_id: str, rng: random.Random, *args, **kwargs):
    """
    Build one round and run the contract's validation hook on it.

    An invalid round is regenerated up to MAX_REGENERATIONS times; if it is
    still invalid the last attempt is returned and the issues are logged.
    """
    contract = get_contract(game_id)
    round_ = contract.build_variant(rng, *args, **kwargs)
    for attempt in range(1, MAX_REGENERATIONS + 1):
        issues = contract.validate(round_)
        if not issues:
            return round_
        logger.warning("Contract %s attempt %d: %s; regenerating", game_id, attempt, issues)
        round_ = contract.build_variant(rng, *args, **kwargs)

    issues = contract.validate(round_)
    if issues:
        logger.error("Contract %s still invalid after %d regenerations: %s", game_id, MAX_REGENERATIONS, issues)
    return round_
