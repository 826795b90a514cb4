from __future__ import annotations

import logging

import pytest

from archetype_core.config import ScoringConfig
from archetype_core.engine import score_quiz
from archetype_core.errors import NoValidScoresError
from archetype_core.types import parse_quiz
from tests.conftest import as_responses


def _tie_quiz():
    return parse_quiz([
        {
            "id": "q1",
            "text": "Pick one",
            "answers": [
                {"id": "a", "archetypeScores": {"ostrich": 5, "prepper": 5, "apocaloptimist": 4}},
                {"id": "b", "archetypeScores": {}},
            ],
        }
    ])


def test_worked_example(worked_example, catalogue):
    questions, responses = worked_example
    res = score_quiz(questions, responses)

    assert res.primary == "prepper"
    assert res.primary_score == pytest.approx(3.0)
    assert res.dominance.dominant == ("prepper",)
    assert not res.dominance.has_tie
    assert res.dominance.threshold == pytest.approx(2.85)
    assert res.all_scores["ostrich"] == pytest.approx(2.0)
    assert set(res.all_scores) == set(catalogue.ids())
    assert res.normalized_scores["prepper"] == pytest.approx(0.6)
    assert res.normalized_scores["ostrich"] == pytest.approx(0.4)
    assert res.confidence.score == pytest.approx(1 / 3)
    assert res.confidence.level == "MODERATE"
    assert res.trait_profile.as_vector() == pytest.approx((0.62, 0.0, 0.62, 0.6, 0.0, 0.6))
    assert res.questions_answered == 5
    assert res.total_questions == 5
    assert res.is_complete

    vis = res.visualizations
    assert vis is not None
    assert len(vis.radar) == 6
    assert vis.radar[1].radius == pytest.approx(0.5)
    assert vis.radar[3].radius == pytest.approx(0.8)
    assert vis.radar_area > 0
    assert vis.distribution[0].archetype_id == "prepper"
    assert vis.distribution[0].percentage == pytest.approx(60.0)
    assert vis.primary_radar is not None
    assert vis.primary_radar[0].raw_value == pytest.approx(0.9)


def test_result_payload_shape(worked_example):
    payload = score_quiz(*worked_example).to_dict()
    for key in (
        "primary", "primaryScore", "dominantArchetypes", "dominantScores", "hasTie",
        "tieThreshold", "allScores", "normalizedScores", "maxScore", "variance",
        "confidence", "userTraitProfile", "userTraitVector", "visualizations",
        "questionsAnswered", "totalQuestions", "isComplete",
    ):
        assert key in payload
    assert payload["dominantArchetypes"] == ["prepper"]
    assert payload["confidence"]["firstPlace"] == "prepper"
    assert payload["visualizations"]["radarChart"]["coordinates"][0]["dimension"] == "awareness"
    assert payload["visualizations"]["scoreDistribution"][1]["archetypeId"] == "ostrich"


def test_scoring_is_repeatable(worked_example):
    first = score_quiz(*worked_example).to_dict()
    second = score_quiz(*worked_example).to_dict()
    assert first == second


def test_tie_resolved_by_traits():
    res = score_quiz(_tie_quiz(), as_responses(("q1", "a")))
    assert res.dominance.dominant == ("ostrich", "prepper")
    assert res.dominance.has_tie
    assert res.primary == "prepper"
    assert res.primary_score == pytest.approx(5.0)


def test_tie_kept_without_trait_break():
    res = score_quiz(_tie_quiz(), as_responses(("q1", "a")), break_ties_with_traits=False)
    assert res.primary == "ostrich"
    assert res.dominance.dominant == ("ostrich", "prepper")
    assert res.to_dict()["hasTie"] is True


def test_tolerance_override_widens_band(worked_example):
    res = score_quiz(*worked_example, tie_tolerance=0.5)
    assert res.dominance.threshold == pytest.approx(1.5)
    assert res.dominance.dominant == ("prepper", "ostrich")
    assert res.primary == "prepper"


def test_config_object_and_invalid_override(worked_example):
    cfg = ScoringConfig(include_visualizations=False)
    res = score_quiz(*worked_example, cfg)
    assert res.visualizations is None
    assert res.to_dict()["visualizations"] is None
    with pytest.raises(ValueError):
        score_quiz(*worked_example, tie_tolerance=1.5)


def test_no_points_raises(worked_example):
    questions, _ = worked_example
    with pytest.raises(NoValidScoresError):
        score_quiz(questions, as_responses(("q1", "c"), ("q2", "c")))
    with pytest.raises(NoValidScoresError):
        score_quiz(questions, [])


def test_partial_responses_are_incomplete(worked_example):
    questions, responses = worked_example
    res = score_quiz(questions, responses[:2])
    assert res.questions_answered == 2
    assert not res.is_complete
    assert res.dominance.dominant == ("ostrich", "prepper")


def test_ad_hoc_primary_has_no_profile_radar():
    quiz = parse_quiz([
        {"id": 1, "text": "t", "answers": [{"id": "a", "archetypeScores": {"newcomer": 3, "ostrich": 1}}]},
    ])
    res = score_quiz(quiz, as_responses((1, "a")))
    assert res.primary == "newcomer"
    assert res.visualizations.primary_radar is None
    assert res.trait_profile.as_vector() == pytest.approx((0.2, 0.0, 0.2, 0.0, 0.0, 0.0))


def test_debug_trace_logs_summary(worked_example, caplog):
    cfg = ScoringConfig(debug_trace=True)
    with caplog.at_level(logging.INFO, logger="archetype_core.engine"):
        score_quiz(*worked_example, cfg)
    lines = [r.getMessage() for r in caplog.records if r.getMessage().startswith("trace ")]
    assert len(lines) == 1
    assert "primary=prepper" in lines[0]
    assert "level=MODERATE" in lines[0]


def test_no_trace_by_default(worked_example, caplog):
    with caplog.at_level(logging.INFO, logger="archetype_core.engine"):
        score_quiz(*worked_example, ScoringConfig(debug_trace=False))
    assert not any(r.getMessage().startswith("trace ") for r in caplog.records)


def test_near_equal_chain_primary_is_within_epsilon_of_max():
    quiz = parse_quiz([
        {"id": 1, "text": "t", "answers": [{"id": "a", "archetypeScores": {"ostrich": 1.0, "prepper": 1.00008, "trickster": 1.00016}}]},
    ])
    res = score_quiz(quiz, as_responses((1, "a")), break_ties_with_traits=False)
    assert res.dominance.dominant == ("prepper", "trickster", "ostrich")
    assert res.primary == "prepper"
    assert res.primary_score > res.dominance.max_score - 1e-4
    assert res.confidence.first_place == res.dominance.dominant[0]


def test_result_maps_are_read_only(worked_example):
    res = score_quiz(*worked_example)
    with pytest.raises(TypeError):
        res.all_scores["prepper"] = 0.0  # type: ignore[index]
    with pytest.raises(TypeError):
        res.normalized_scores["prepper"] = 0.0  # type: ignore[index]
    assert res.to_dict()["allScores"]["prepper"] == pytest.approx(3.0)
