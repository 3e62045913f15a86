from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resumefit import calibrate, generate_structural_suggestions, score  # noqa: E402
from resumefit.core.logging_setup import configure_logging  # noqa: E402
from resumefit.features.candidate_type import experience_level_for  # noqa: E402


def _load_payload(path: str) -> dict:
    raw = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise SystemExit("Payload must be a JSON object.")
    return payload


def main() -> None:
    parser = argparse.ArgumentParser(description="Score a résumé against a job description from a JSON payload.")
    parser.add_argument("payload", help="Path to the JSON payload, or '-' for stdin")
    parser.add_argument("--out", default="", help="Write the JSON report here instead of stdout")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation")
    args = parser.parse_args()

    configure_logging(args.log_level)
    payload = _load_payload(args.payload)

    breakdown = score(
        payload.get("job_requirements") or [],
        payload.get("candidate_qualifications"),
        payload.get("keywords") or [],
        payload.get("resume_sections"),
        payload.get("resume_text"),
        payload.get("job_description_text"),
        payload.get("job_type"),
        payload.get("candidate_type_input"),
    )
    calibration = calibrate(
        breakdown.overall,
        experience_level_for(breakdown.candidate_type.candidate_type),
        len(breakdown.missing_keywords),
        breakdown.quantification_density,
        breakdown.total_bullets,
    )
    suggestions = generate_structural_suggestions(
        breakdown.candidate_type.candidate_type,
        payload.get("resume_sections"),
        payload.get("section_order") or [],
        payload.get("resume_text"),
    )

    report = {
        "score": breakdown.model_dump(mode="json"),
        "calibration": calibration.model_dump(mode="json"),
        "structural_suggestions": [item.model_dump(mode="json") for item in suggestions],
    }
    rendered = json.dumps(report, indent=args.indent, ensure_ascii=False)
    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(rendered + "\n", encoding="utf-8")
        print(f"Wrote {out_path}")
    else:
        print(rendered)


if __name__ == "__main__":
    main()
