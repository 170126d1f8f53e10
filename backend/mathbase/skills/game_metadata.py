GAME_CATALOG = {
    "lessonChallenge": {
        "title": "Lesson Challenge",
        "description": "Test what you learned! Fractions, algebra, equations and more from the lessons.",
        "icon": "school",
        "color": "#6366F1",
        "level": "medium",
    },
    "quiz": {
        "title": "Lightning Quiz",
        "description": "Type the result as fast as you can. Difficulty rises as you go.",
        "icon": "bolt",
        "color": "#F59E0B",
        "level": "easy",
    },
    "multipleChoice": {
        "title": "What's the Result?",
        "description": "Pick the right answer out of 4 options. Harder operations every level!",
        "icon": "check-circle",
        "color": "#10B981",
        "level": "easy",
    },
    "complete": {
        "title": "Complete the Equation",
        "description": "Find the missing number or operator. Train your reverse reasoning.",
        "icon": "help",
        "color": "#8B5CF6",
        "level": "medium",
    },
    "sequence": {
        "title": "Number Sequence",
        "description": "Spot the pattern: sums, products, squares, cubes, primes and Fibonacci!",
        "icon": "trending-up",
        "color": "#F59E0B",
        "level": "medium",
    },
    "memory": {
        "title": "Math Memory",
        "description": "Match each operation with its result. Harder operations every round!",
        "icon": "grid-on",
        "color": "#EC4899",
        "level": "medium",
    },
    "timeAttack": {
        "title": "Time Attack",
        "description": "60 seconds! The more you get right, the harder it gets. Combos add time!",
        "icon": "timer",
        "color": "#EF4444",
        "level": "hard",
    },
}
