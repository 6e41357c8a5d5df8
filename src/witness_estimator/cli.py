from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import ScenarioConfig, StudyConfig, default_study
from .estimator import run_study
from .io import load_access_pattern
from .render import render_text


def _existing_path(value: str) -> Path:
    path = Path(value)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"File not found: {value}")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="witness-estimator", add_help=True)
    parser.add_argument(
        "--config",
        type=_existing_path,
        default=None,
        help="Path to study.yaml (default: built-in MPT vs Verkle study)",
    )
    parser.add_argument(
        "--pattern",
        nargs="+",
        type=_existing_path,
        default=[],
        help="Extra access pattern files (json|yaml) to add as scenarios",
    )
    parser.add_argument("--format", choices=["json", "text"], default="json", help="Report format")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write report to this path (default: stdout)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log estimation steps to stderr")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        study = StudyConfig.from_yaml(args.config) if args.config is not None else default_study()
        extra = [load_access_pattern(p) for p in args.pattern]
        if extra:
            study = study.model_copy(
                update={
                    "scenarios": study.scenarios
                    + [ScenarioConfig(name=p.name or "pattern", pattern=p) for p in extra]
                }
            )
        report = run_study(
            study,
            paths={
                "config": None if args.config is None else str(args.config),
                "patterns": [str(p) for p in args.pattern],
            },
        )
    except Exception as exc:  # noqa: BLE001
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.format == "text":
        text = render_text(report)
    else:
        text = json.dumps(report.model_dump(mode="json"), indent=2, sort_keys=True)

    if args.output is None:
        print(text)
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(text + "\n", encoding="utf-8")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
