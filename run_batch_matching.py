import argparse
import json
import os
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
from dotenv import load_dotenv
from pydantic import ValidationError

load_dotenv()

from advisor_match.models import AdvisorProfile, ClientNeed, MatchScore
from advisor_match.orchestrator import MatchingEngine
from advisor_match.scoring.policies import UnknownPolicyError
from advisor_match.scoring.rounding import round_half_up
from advisor_match.services.display import (
    get_confidence_label,
    get_score_color,
    get_score_label,
    render_explanation,
)
from advisor_match.services.logging_utils import prefixed_logger
from advisor_match.services.taxonomy_service import TaxonomyService

PROJECT_ROOT = Path(__file__).resolve().parent


class RosterLoadError(Exception):
    """Raised when an input file cannot be read or does not match the expected shape."""
    pass


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise RosterLoadError(f"Cannot read {path}: {e}") from e


def _resolve(path_str: str) -> Path:
    path = Path(path_str)
    return path if path.is_absolute() else (PROJECT_ROOT / path).resolve()


def _iter_client_files(paths: List[Path]) -> List[Path]:
    files: List[Path] = []
    for p in paths:
        if p.is_dir():
            files.extend(sorted(p.glob("*.json")))
        else:
            files.append(p)
    return files


def load_roster(path: Path) -> List[AdvisorProfile]:
    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get("advisors", [])
    try:
        return [AdvisorProfile.model_validate(item) for item in data]
    except (ValidationError, TypeError) as e:
        raise RosterLoadError(f"Invalid advisor roster {path}: {e}") from e


def load_client(path: Path) -> Tuple[List[ClientNeed], Optional[str], Optional[str]]:
    """Client file: either a list of needs or {client_segment, client_complexity, needs}."""
    data = _read_json(path)
    segment = complexity = None
    if isinstance(data, dict):
        segment = data.get("client_segment")
        complexity = data.get("client_complexity")
        data = data.get("needs", [])
    try:
        needs = [ClientNeed.model_validate(item) for item in data]
    except (ValidationError, TypeError) as e:
        raise RosterLoadError(f"Invalid client needs {path}: {e}") from e
    return needs, segment, complexity


def result_to_dict(rank: int, match: MatchScore) -> Dict[str, Any]:
    policy = match.policy
    out: Dict[str, Any] = {
        "rank": rank,
        "advisor_id": match.advisor_id,
        "advisor_name": match.advisor.name or "",
        "lead_score": match.lead_score,
        "backup_score": match.backup_score,
        "support_score": match.support_score,
        "score_color": get_score_color(match.lead_score, policy),
        "score_label": get_score_label(match.lead_score, policy),
        "explanation": render_explanation(match.explanation, policy),
        "skill_matches": [m.model_dump(mode="json") for m in match.skill_matches],
    }
    if match.confidence_score is not None:
        out["confidence_score"] = match.confidence_score
        out["confidence_label"] = get_confidence_label(match.confidence_score)
    if match.metrics is not None:
        out["metrics"] = match.metrics.model_dump(mode="json")
    return out


def _summary(results: List[MatchScore]) -> Dict[str, Any]:
    if not results:
        return {"n_advisors": 0}
    lead = np.array([r.lead_score for r in results], dtype=float)
    return {
        "n_advisors": len(results),
        "best_advisor": results[0].advisor_id,
        "lead_mean": round_half_up(float(lead.mean()), 2),
        "lead_median": round_half_up(float(np.median(lead)), 2),
        "lead_max": float(lead.max()),
        "lead_min": float(lead.min()),
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description=(
            "Scores an advisor roster against one or more clients' needs and writes "
            "the ranked matches as JSON."
        )
    )
    parser.add_argument("--advisors", default="data/samples/advisors.json", help="Advisor roster JSON.")
    parser.add_argument("--clients", nargs="+", default=["data/samples/client.json"], help="Client needs JSON files or directories.")
    parser.add_argument("--out", default="-", help="Output JSON path ('-' = stdout).")
    parser.add_argument("--top", type=int, default=0, help="If > 0, keep only the best N advisors per client.")
    parser.add_argument("--verbose", action="store_true", help="Print the score breakdown to stderr.")

    parser.add_argument("--policy", default=os.getenv("ADVISOR_MATCH_POLICY", "enhanced"), help="Scoring policy: enhanced or classic.")
    parser.add_argument("--config", default=None, help="JSON object with MatchConfig overrides.")

    parser.add_argument("--taxonomy", action=argparse.BooleanOptionalAction, default=True, help="Resolve subtopic names from the taxonomy CSVs (default: on).")
    parser.add_argument("--taxonomy-dir", default=os.getenv("ADVISOR_MATCH_TAXONOMY_DIR", "data/taxonomy"))

    args = parser.parse_args(argv)
    log = prefixed_logger("[BatchMatching]", enabled=args.verbose)

    try:
        overrides = json.loads(args.config) if args.config else None
        engine = MatchingEngine(policy=args.policy, config=overrides, verbose=args.verbose)
    except (json.JSONDecodeError, UnknownPolicyError, ValidationError) as e:
        raise SystemExit(f"Invalid configuration: {e}")

    taxonomy = None
    if args.taxonomy:
        taxonomy_dir = _resolve(args.taxonomy_dir)
        try:
            taxonomy = TaxonomyService(
                domains_csv_path=str(taxonomy_dir / "domains.csv"),
                subtopics_csv_path=str(taxonomy_dir / "subtopics.csv"),
                verbose=args.verbose,
            )
        except (OSError, KeyError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise SystemExit(f"Cannot load taxonomy from {taxonomy_dir}: {e}")

    try:
        advisors = load_roster(_resolve(args.advisors))
    except RosterLoadError as e:
        raise SystemExit(str(e))

    client_paths = _iter_client_files([_resolve(p) for p in args.clients])
    if not client_paths:
        raise SystemExit(f"No client files found in: {', '.join(args.clients)}")

    runs: List[Dict[str, Any]] = []
    for client_path in client_paths:
        started = time.perf_counter()
        run: Dict[str, Any] = {
            "client_file": client_path.name,
            "timestamp_utc": _utc_now_iso(),
            "policy": engine.policy.name,
            "error": "",
        }
        try:
            needs, segment, complexity = load_client(client_path)
            if taxonomy is not None:
                needs = taxonomy.attach(needs)

            ranked = engine.rank(advisors, needs, client_segment=segment, client_complexity=complexity)
            if args.top > 0:
                ranked = ranked[:args.top]

            run["client_segment"] = segment
            run["client_complexity"] = complexity
            run["n_needs"] = len(needs)
            run["results"] = [result_to_dict(i, m) for i, m in enumerate(ranked, start=1)]
            run["summary"] = _summary(ranked)
        except RosterLoadError as e:
            run["error"] = f"{type(e).__name__}: {e}"
        finally:
            run["elapsed_ms"] = int((time.perf_counter() - started) * 1000)
            runs.append(run)
            if run["error"]:
                log(f"ERROR {client_path.name}: {run['error']}")
            else:
                log(f"OK {client_path.name} -> best={run['summary'].get('best_advisor', '-')}")

    payload = {
        "generated_at": _utc_now_iso(),
        "advisors_file": str(args.advisors),
        "n_advisors": len(advisors),
        "runs": runs,
    }
    text = json.dumps(payload, ensure_ascii=False, indent=2)

    if args.out == "-":
        sys.stdout.write(text + "\n")
    else:
        out_path = _resolve(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n", encoding="utf-8")
        log(f"Output JSON: {out_path}")

    return 1 if any(run["error"] for run in runs) else 0


if __name__ == "__main__":
    raise SystemExit(main())
