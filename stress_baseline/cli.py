"""
Command Line Entry Point
========================
Classifies a stress-tester run's observed issues against the baseline.

    python -m stress_baseline observed.json
    python -m stress_baseline observed.json --config asan --baseline expected_issues.json
    python -m stress_baseline observed.json --record https://bugs.example.com/123

The observations file is a JSON array of ObservedIssue objects, e.g.
    {"kind": "errored", "status": 11, "file": "Foo.swift", "arguments": "..."}

Exit Codes:
    0 — every observation is covered by the baseline (or was just recorded)
    1 — at least one unexpected issue
    2 — the baseline or the observations could not be loaded
"""
import argparse
import json
import logging
import sys
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from stress_baseline.core.config import EXPECTED_ISSUES_PATH, STRESS_TESTER_CONFIG
from stress_baseline.core.errors import BaselineLoadError
from stress_baseline.models.issues import ErroredIssue, ObservedIssue
from stress_baseline.services.baseline import IssueBaseline
from stress_baseline.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_LOAD_FAILURE = 2

_OBSERVATIONS = TypeAdapter(list[ObservedIssue])


def describe_issue(issue: ObservedIssue) -> str:
    """One-line human description of an observed issue."""
    if isinstance(issue, ErroredIssue):
        status = "unknown status" if issue.status is None else f"status {issue.status}"
        return f"stressTesterCrash ({status}) in {issue.file}: {issue.arguments}"
    request = issue.request
    offset = getattr(request, "offset", None)
    where = request.document.path if offset is None else f"{request.document.path}:{offset}"
    return f"{request.kind} failed in {where}"


def load_observations(path: str) -> list:
    """Read a JSON array of observed issues; raises ValueError on bad input."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    try:
        return _OBSERVATIONS.validate_python(data)
    except ValidationError as e:
        raise ValueError(f"invalid observations in {path}: {e}") from e


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="stress_baseline",
        description="Check observed stress-tester issues against the expected-issue baseline.",
    )
    parser.add_argument("observations", help="JSON array of observed issues.")
    parser.add_argument(
        "--baseline",
        default=EXPECTED_ISSUES_PATH,
        help=f"Baseline file, .json or .yaml (defaults to {EXPECTED_ISSUES_PATH}).",
    )
    parser.add_argument(
        "--config",
        default=STRESS_TESTER_CONFIG,
        help=f"Config identifier of this run (defaults to {STRESS_TESTER_CONFIG}).",
    )
    parser.add_argument(
        "--record",
        metavar="ISSUE_URL",
        help="Append unexpected issues to the baseline under this issue URL.",
    )
    parser.add_argument(
        "--output",
        help="Where to write the updated baseline when recording (defaults to --baseline).",
    )
    parser.add_argument("--log-dir", default=None, help="Also write logs to this directory.")
    args = parser.parse_args(argv)

    setup_logging(log_dir=args.log_dir)

    try:
        baseline = IssueBaseline.load(args.baseline)
        observed = load_observations(args.observations)
    except (BaselineLoadError, OSError, ValueError) as e:
        logger.error("%s", e)
        return EXIT_LOAD_FAILURE

    expected, unexpected = baseline.for_config(args.config).partition(observed)
    for match in expected:
        print(f"expected   {describe_issue(match.issue)} ({match.expected.issue_url})")
    for issue in unexpected:
        print(f"UNEXPECTED {describe_issue(issue)}")
    print(f"{len(expected)} expected, {len(unexpected)} unexpected (config {args.config})")

    if not unexpected:
        return EXIT_OK

    if args.record:
        updated = baseline
        for issue in unexpected:
            updated = updated.record(issue, issue_url=args.record, config=args.config)
        updated.save(args.output or args.baseline)
        print(f"Recorded {len(unexpected)} new expected issues")
        return EXIT_OK

    return EXIT_UNEXPECTED
