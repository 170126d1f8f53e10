"""Lightning quiz: free-answer arithmetic with growing operands."""

from .arithmetic import ArithmeticContract


class QuizContract(ArithmeticContract):
    game_id = "quiz"
    difficulty_divisor = 5

    ranges = {
        "+": [
            ((1, 10), (1, 10)),
            ((10, 59), (10, 59)),
            ((50, 149), (50, 149)),
            ((100, 599), (100, 599)),
        ],
        "-": [
            ((5, 19), None),
            ((20, 99), None),
            ((100, 299), None),
            ((200, 699), None),
        ],
        "×": [
            ((2, 6), (2, 6)),
            ((2, 11), (2, 11)),
            ((5, 16), (5, 16)),
            ((10, 24), (5, 19)),
        ],
        "÷": [
            ((2, 6), (2, 6)),
            ((2, 10), (2, 11)),
            ((2, 13), (5, 16)),
            ((5, 19), (10, 24)),
        ],
    }
