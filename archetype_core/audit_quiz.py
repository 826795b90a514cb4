from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Iterable, Optional

from .catalogue import TraitCatalogue, default_catalogue
from .types import Question, parse_quiz
from .validators import validate_quiz


def _blank_archetype() -> dict[str, object]:
    return {"answers": 0, "questions": 0, "max_points": 0.0, "catalogued": True}


def audit_quiz(questions: Iterable[Question], catalogue: Optional[TraitCatalogue] = None) -> dict[str, object]:
    """Per-archetype reachability of a quiz.

    ``max_points`` is the best weighted score a respondent can reach by
    always picking the answer that rewards the archetype most.
    """

    cat = catalogue if catalogue is not None else default_catalogue()
    coverage: dict[str, dict[str, object]] = {aid: _blank_archetype() for aid in cat.ids()}
    totals = {"questions": 0, "answers": 0, "ad_hoc": 0}

    for q in questions:
        totals["questions"] += 1
        best: dict[str, float] = {}
        for ans in q.answers:
            totals["answers"] += 1
            for aid, pts in (ans.archetype_scores or {}).items():
                if aid not in coverage:
                    coverage[aid] = _blank_archetype()
                    coverage[aid]["catalogued"] = False
                    totals["ad_hoc"] += 1
                coverage[aid]["answers"] += 1  # type: ignore[operator]
                best[aid] = max(best.get(aid, float(pts)), float(pts))
        for aid, pts in best.items():
            coverage[aid]["questions"] += 1  # type: ignore[operator]
            if pts > 0:
                coverage[aid]["max_points"] += q.weight * pts  # type: ignore[operator]

    warnings: list[str] = []
    for aid, data in coverage.items():
        if not data["catalogued"]:
            warnings.append(f"{aid} is not in the trait catalogue; excluded from trait analysis")
        elif data["max_points"] <= 0:  # type: ignore[operator]
            warnings.append(f"{aid} cannot score positive points in this quiz")

    return {"coverage": coverage, "warnings": warnings, "totals": totals}


def print_report(summary: dict[str, object]) -> None:
    coverage: dict[str, dict[str, object]] = summary["coverage"]  # type: ignore[assignment]
    print("=== Archetype Coverage ===")
    for aid in sorted(coverage, key=lambda k: (-float(coverage[k]["max_points"]), k)):  # type: ignore[arg-type]
        data = coverage[aid]
        mark = "" if data["catalogued"] else " (ad hoc)"
        print(f"  {aid:<26}{mark} answers:{data['answers']:3d}  questions:{data['questions']:3d}  max:{float(data['max_points']):6.2f}")  # type: ignore[arg-type]

    warnings: list[str] = summary["warnings"]  # type: ignore[assignment]
    if warnings:
        print("\nWarnings:")
        for msg in warnings:
            print(f" - {msg}")
    else:
        print("\nNo warnings.")

    print("\nTotals:", summary["totals"])


def write_summary(summary: dict[str, object], path: Path = Path("quiz_audit.json")) -> str:
    text = json.dumps(summary, indent=2, sort_keys=True)
    path.write_text(text + "\n", encoding="utf-8")
    return text


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("usage: python -m archetype_core.audit_quiz QUIZ.json [SUMMARY.json]")
        return 1
    raw = json.loads(Path(args[0]).read_text(encoding="utf-8"))
    report = validate_quiz(raw)
    if not report.valid:
        print("Quiz is invalid:")
        for msg in report.errors:
            print(f" - {msg}")
        return 1
    summary = audit_quiz(parse_quiz(raw))
    print_report(summary)
    if len(args) > 1:
        write_summary(summary, Path(args[1]))
    return 2 if summary["warnings"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
