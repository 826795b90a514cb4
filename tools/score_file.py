from __future__ import annotations
import argparse, json, sys
from pathlib import Path

from archetype_core.engine import score_quiz
from archetype_core.config import load_config
from archetype_core.errors import NoValidScoresError, DivideByZeroError
from archetype_core.types import parse_quiz, parse_responses
from archetype_core.validators import validate_quiz, validate_responses


def _read_json(path: str):
    return json.loads(Path(path).read_text(encoding="utf-8"))


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Score a saved response list against a quiz definition.")
    ap.add_argument("quiz", help="quiz JSON (question list or {questions: [...]})")
    ap.add_argument("responses", help="responses JSON ([{questionId, answerId}, ...])")
    ap.add_argument("--tie-tolerance", type=float, default=None)
    ap.add_argument("--no-tie-break", action="store_true", help="keep multiple primaries instead of resolving by traits")
    ap.add_argument("--no-visualizations", action="store_true")
    ap.add_argument("--out", default=None, help="write result JSON here instead of stdout")
    args = ap.parse_args(argv)

    quiz_raw = _read_json(args.quiz)
    resp_raw = _read_json(args.responses)

    errors = validate_quiz(quiz_raw).errors + validate_responses(quiz_raw, resp_raw).errors
    if errors:
        print("Input is invalid:", file=sys.stderr)
        for msg in errors:
            print(f" - {msg}", file=sys.stderr)
        return 2

    try:
        res = score_quiz(
            parse_quiz(quiz_raw),
            parse_responses(resp_raw),
            load_config(),
            tie_tolerance=args.tie_tolerance,
            break_ties_with_traits=False if args.no_tie_break else None,
            include_visualizations=False if args.no_visualizations else None,
        )
    except (NoValidScoresError, DivideByZeroError) as exc:
        print(f"Insufficient data to compute a result: {exc}", file=sys.stderr)
        return 3

    text = json.dumps(res.to_dict(), indent=2)
    if args.out:
        Path(args.out).write_text(text + "\n", encoding="utf-8")
        print(f"Result written to: {args.out}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
