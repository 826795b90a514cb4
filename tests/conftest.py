from __future__ import annotations

import pytest

from archetype_core.catalogue import TraitCatalogue, default_catalogue
from archetype_core.types import Question, Response, parse_quiz, parse_responses


def build_sample_quiz() -> list[dict]:
    """Three questions, the second weighted 1.5, as plain collaborator payload."""

    return [
        {
            "id": 1,
            "text": "How do you view collapse?",
            "weight": 1.0,
            "answers": [
                {"id": "a", "text": "What collapse?", "archetypeScores": {"ostrich": 3}},
                {"id": "b", "text": "It is serious", "archetypeScores": {"prepper": 2, "prophet-of-doom": 2}},
                {"id": "c", "text": "Opportunity", "archetypeScores": {"apocaloptimist": 3}},
            ],
        },
        {
            "id": 2,
            "text": "What is your response?",
            "weight": 1.5,
            "answers": [
                {"id": "a", "text": "Prepare", "archetypeScores": {"prepper": 2}},
                {"id": "b", "text": "Warn others", "archetypeScores": {"prophet-of-doom": 2}},
                {"id": "c", "text": "Stay calm", "archetypeScores": {"blissed-out-yogi": 2}},
            ],
        },
        {
            "id": 3,
            "text": "Who do you trust?",
            "weight": 1.0,
            "answers": [
                {"id": "a", "text": "Myself", "archetypeScores": {"prepper": 1, "ostrich": 1}},
                {"id": "b", "text": "Community", "archetypeScores": {"sacred-keeper": 2}},
                {"id": "c", "text": "No one", "archetypeScores": {"conspiracy-theorist": 3}},
            ],
        },
    ]


def build_worked_example() -> tuple[list[dict], list[dict]]:
    """Five unit-weight questions ending at ostrich=2, prepper=3."""

    questions: list[dict] = []
    picks = ["ostrich", "prepper", "prepper", "ostrich", "prepper"]
    for idx in range(1, 6):
        questions.append(
            {
                "id": f"q{idx}",
                "text": f"Question {idx}",
                "answers": [
                    {"id": "a", "text": "A", "archetypeScores": {"ostrich": 1}},
                    {"id": "b", "text": "B", "archetypeScores": {"prepper": 1}},
                    {"id": "c", "text": "C", "archetypeScores": {}},
                ],
            }
        )
    responses = [
        {"questionId": f"q{idx}", "answerId": "a" if pick == "ostrich" else "b"}
        for idx, pick in enumerate(picks, start=1)
    ]
    return questions, responses


def as_responses(*pairs: tuple[object, object]) -> list[Response]:
    return [Response(question_id=q, answer_id=a) for q, a in pairs]


@pytest.fixture
def catalogue() -> TraitCatalogue:
    return default_catalogue()


@pytest.fixture
def sample_raw() -> list[dict]:
    return build_sample_quiz()


@pytest.fixture
def sample_quiz() -> list[Question]:
    return parse_quiz(build_sample_quiz())


@pytest.fixture
def worked_example() -> tuple[list[Question], list[Response]]:
    questions, responses = build_worked_example()
    return parse_quiz(questions), parse_responses(responses)
