"""Built-in question set used until the host saves its own."""

from __future__ import annotations

from millionaire_app.core.models import QuizQuestion

DEFAULT_QUESTIONS: tuple[QuizQuestion, ...] = (
    QuizQuestion("What is 15 + 27?", ["42", "41", "43", "40"], 0, "Arithmetic"),
    QuizQuestion("What is 8 × 7?", ["54", "56", "58", "60"], 1, "Arithmetic"),
    QuizQuestion("What is 144 ÷ 12?", ["10", "11", "12", "13"], 2, "Arithmetic"),
    QuizQuestion("What is 5² + 3²?", ["32", "34", "36", "38"], 1, "Algebra"),
    QuizQuestion("What is √64?", ["6", "7", "8", "9"], 2, "Algebra"),
    QuizQuestion("What is 2³ × 3²?", ["70", "72", "74", "76"], 1, "Algebra"),
    QuizQuestion("What is 15% of 200?", ["25", "30", "35", "40"], 1, "Percentages"),
    QuizQuestion(
        "What is the area of a circle with radius 7? (π ≈ 3.14)",
        ["147.86", "153.86", "159.86", "165.86"],
        1,
        "Geometry",
    ),
    QuizQuestion("What is 3x + 5 = 20, find x?", ["3", "4", "5", "6"], 2, "Algebra"),
    QuizQuestion("What is the derivative of x²?", ["x", "2x", "x²", "2x²"], 1, "Calculus"),
    QuizQuestion(
        "What is ∫(2x + 3)dx?",
        ["x² + 3x + C", "2x² + 3x + C", "x² + 6x + C", "2x² + 6x + C"],
        0,
        "Calculus",
    ),
    QuizQuestion(
        "What is the limit of (x² - 4)/(x - 2) as x approaches 2?",
        ["2", "3", "4", "5"],
        2,
        "Calculus",
    ),
    QuizQuestion("What is the determinant of [[2,3],[4,5]]?", ["-2", "-1", "1", "2"], 0, "Linear Algebra"),
    QuizQuestion("What is the sum of the first 10 natural numbers?", ["50", "55", "60", "65"], 1, "Sequences"),
    QuizQuestion(
        "What is the probability of rolling a 6 on a fair die?",
        ["1/3", "1/4", "1/5", "1/6"],
        3,
        "Probability",
    ),
)
