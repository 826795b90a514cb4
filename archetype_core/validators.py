from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping


@dataclass
class ValidationReport:
    valid: bool
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {"valid": self.valid, "errors": list(self.errors)}


def _missing(v: Any) -> bool:
    return v is None or (isinstance(v, str) and not v.strip())


def _bad_id(v: Any) -> bool:
    # ids are strings or integers; anything else cannot key a lookup
    return isinstance(v, bool) or not isinstance(v, (str, int))


def _is_number(v: Any) -> bool:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    try:
        return math.isfinite(v)
    except OverflowError:
        # integers too large for a float
        return False


def _get(obj: Any, key: str, alt: str | None = None) -> Any:
    if not isinstance(obj, Mapping): return None
    val = obj.get(key)
    if val is None and alt: val = obj.get(alt)
    return val


def validate_quiz(questions: Any) -> ValidationReport:
    """Structural check of a plain quiz definition; never raises."""
    errors: List[str] = []
    if isinstance(questions, Mapping) and "questions" in questions:
        questions = questions["questions"]
    if not isinstance(questions, list):
        return ValidationReport(False, ["Questions must be an array"])
    if not questions:
        errors.append("Quiz must have at least one question")

    seen_q: set = set()
    for idx, q in enumerate(questions):
        if not isinstance(q, Mapping):
            errors.append(f"Question at index {idx} must be an object"); continue
        qid = q.get("id")
        label = idx if _missing(qid) else qid
        if _missing(qid):
            errors.append(f"Question at index {idx} missing id")
        elif _bad_id(qid):
            errors.append(f"Question at index {idx} id must be a string or number")
        elif qid in seen_q:
            errors.append(f"Duplicate question id: {qid}")
        else:
            seen_q.add(qid)
        if _missing(q.get("text")):
            errors.append(f"Question {label} missing text")
        weight = q.get("weight")
        if weight is not None and (not _is_number(weight) or float(weight) <= 0):
            errors.append(f"Question {label} weight must be a positive number")

        answers = q.get("answers")
        if not isinstance(answers, list) or not answers:
            errors.append(f"Question {label} must have at least one answer")
            continue
        seen_a: set = set()
        for a_idx, a in enumerate(answers):
            if not isinstance(a, Mapping):
                errors.append(f"Answer at index {a_idx} for question {label} must be an object"); continue
            aid = a.get("id")
            a_label = a_idx if _missing(aid) else aid
            if _missing(aid):
                errors.append(f"Answer at index {a_idx} for question {label} missing id")
            elif _bad_id(aid):
                errors.append(f"Answer at index {a_idx} for question {label} id must be a string or number")
            elif aid in seen_a:
                errors.append(f"Duplicate answer id {aid} for question {label}")
            else:
                seen_a.add(aid)
            pts = _get(a, "archetypeScores", "archetype_scores")
            if not isinstance(pts, Mapping):
                errors.append(f"Answer {a_label} for question {label} missing archetypeScores")
                continue
            for arch, val in pts.items():
                if not _is_number(val):
                    errors.append(f"Answer {a_label} for question {label} has non-numeric points for {arch}")
    return ValidationReport(not errors, errors)


def validate_responses(questions: Any, responses: Any) -> ValidationReport:
    """Check every response resolves to a known question and answer."""
    errors: List[str] = []
    if not isinstance(responses, list):
        return ValidationReport(False, ["User responses must be an array"])
    if isinstance(questions, Mapping) and "questions" in questions:
        questions = questions["questions"]

    by_id: Dict[Any, Mapping] = {}
    for q in questions if isinstance(questions, list) else []:
        if isinstance(q, Mapping) and not _missing(q.get("id")) and not _bad_id(q.get("id")):
            by_id.setdefault(q["id"], q)

    for idx, r in enumerate(responses):
        qid = _get(r, "questionId", "question_id")
        aid = _get(r, "answerId", "answer_id")
        if _missing(qid):
            errors.append(f"Response at index {idx} missing questionId"); continue
        if _missing(aid):
            errors.append(f"Response at index {idx} missing answerId"); continue
        q = None if _bad_id(qid) else by_id.get(qid)
        if q is None:
            errors.append(f"Response references unknown question: {qid}"); continue
        answers = q.get("answers") if isinstance(q.get("answers"), list) else []
        if not any(isinstance(a, Mapping) and a.get("id") == aid for a in answers):
            errors.append(f"Response references unknown answer: {aid} for question {qid}")
    return ValidationReport(not errors, errors)
