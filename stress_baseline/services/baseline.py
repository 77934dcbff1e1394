"""
Issue Baseline
==============
The set of expected issues consulted while stress testing.

Pipeline (per run):
    1. Load the baseline file (JSON, or YAML for hand-authored baselines)
    2. Narrow to the records of the run's config identifier
    3. Optionally pre-filter by the file under test (applicable_to)
    4. For each observed issue, take the first matching record
    5. Unmatched observations are unexpected and get reported

Contract:
    - Loading is all-or-nothing: one corrupt record aborts the load with
      BaselineLoadError, since a silently shrunk baseline would hide regressions.
    - The baseline is immutable; record() returns a new baseline.
"""
import json
import logging
import os
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

import yaml

from stress_baseline.core.config import EXPECTED_ISSUES_PATH, STRESS_TESTER_CONFIG
from stress_baseline.core.constants import BASELINE_JSON_SUFFIXES, BASELINE_YAML_SUFFIXES
from stress_baseline.core.errors import BaselineLoadError, ExpectedIssueDecodeError
from stress_baseline.models.expected_issue import ExpectedIssue
from stress_baseline.models.issues import ErroredIssue, ObservedIssue
from stress_baseline.services.codec import decode_expected_issue, dumps_expected_issues

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssueMatch:
    """An observed issue paired with the baseline record that covers it."""
    issue: ObservedIssue
    expected: ExpectedIssue


class IssueBaseline:
    """
    Ordered, read-only collection of ExpectedIssue records.

    Usage:
        baseline = IssueBaseline.load("expected_issues.json").for_config("main")
        expected, unexpected = baseline.partition(observed_issues)
    """

    def __init__(self, expected_issues: Iterable[ExpectedIssue] = ()) -> None:
        self._issues: tuple[ExpectedIssue, ...] = tuple(expected_issues)

    def __iter__(self) -> Iterator[ExpectedIssue]:
        return iter(self._issues)

    def __len__(self) -> int:
        return len(self._issues)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IssueBaseline):
            return NotImplemented
        return self._issues == other._issues

    def __repr__(self) -> str:
        return f"IssueBaseline({len(self._issues)} expected issues)"

    # -----------------------------------------------------------------------
    # Loading / saving
    # -----------------------------------------------------------------------
    @classmethod
    def load(cls, path: Optional[str] = None) -> "IssueBaseline":
        """
        Load a baseline file.

        Parameters
        ----------
        path : str, optional
            A .json file, or a .yaml/.yml file, holding a list of records.
            Defaults to EXPECTED_ISSUES_PATH.

        Returns
        -------
        IssueBaseline

        Raises
        ------
        BaselineLoadError
            If the file is missing or unreadable, is not a list, or any
            record fails to decode.
        """
        abs_path = os.path.abspath(path or EXPECTED_ISSUES_PATH)
        try:
            with open(abs_path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise BaselineLoadError(abs_path, str(e)) from e

        data = _parse(abs_path, content)
        if not isinstance(data, list):
            raise BaselineLoadError(abs_path, f"expected a list of records, got {type(data).__name__}")

        issues = []
        for index, item in enumerate(data):
            try:
                issues.append(decode_expected_issue(item))
            except ExpectedIssueDecodeError as e:
                raise BaselineLoadError(abs_path, str(e), index=index) from e

        logger.info("Loaded %d expected issues from %s", len(issues), abs_path)
        return cls(issues)

    def save(self, path: str) -> None:
        """Write the baseline as a JSON array (indent 2)."""
        abs_path = os.path.abspath(path)
        logger.info("Writing %d expected issues to %s", len(self._issues), abs_path)
        with open(abs_path, "w", encoding="utf-8") as f:
            f.write(dumps_expected_issues(self._issues))
            f.write("\n")

    # -----------------------------------------------------------------------
    # Narrowing
    # -----------------------------------------------------------------------
    def for_config(self, config: Optional[str] = None) -> "IssueBaseline":
        """Records that apply to the given config identifier (default: STRESS_TESTER_CONFIG)."""
        config = config or STRESS_TESTER_CONFIG
        return IssueBaseline(i for i in self._issues if config in i.applicable_configs)

    def applicable_to(self, path: str) -> "IssueBaseline":
        """Records whose path pattern admits the given file."""
        return IssueBaseline(i for i in self._issues if i.is_applicable(path))

    # -----------------------------------------------------------------------
    # Matching
    # -----------------------------------------------------------------------
    def find_match(self, issue: ObservedIssue) -> Optional[ExpectedIssue]:
        """Return the first record matching the issue, or None if it is new."""
        for expected in self._issues:
            if expected.matches(issue):
                logger.debug("Issue in %s matched %s", _issue_file(issue), expected.issue_url)
                return expected
        return None

    def is_expected(self, issue: ObservedIssue) -> bool:
        return self.find_match(issue) is not None

    def partition(
        self, issues: Iterable[ObservedIssue]
    ) -> tuple[list[IssueMatch], list[ObservedIssue]]:
        """
        Split observations into known issues and unexpected ones.

        Returns
        -------
        tuple[list[IssueMatch], list[ObservedIssue]]
            (expected, unexpected), each in input order.
        """
        expected: list[IssueMatch] = []
        unexpected: list[ObservedIssue] = []
        for issue in issues:
            match = self.find_match(issue)
            if match is None:
                logger.warning("Unexpected %s issue in %s", issue.kind, _issue_file(issue))
                unexpected.append(issue)
            else:
                expected.append(IssueMatch(issue=issue, expected=match))
        return expected, unexpected

    def record(self, issue: ObservedIssue, issue_url: str, config: str) -> "IssueBaseline":
        """Return a new baseline with a record for the issue appended."""
        added = ExpectedIssue.from_issue(issue, issue_url=issue_url, config=config)
        logger.info("Recording expected issue for %s (%s)", _issue_file(issue), issue_url)
        return IssueBaseline(self._issues + (added,))


def _issue_file(issue: ObservedIssue) -> str:
    if isinstance(issue, ErroredIssue):
        return issue.file
    return issue.request.document.path


def _parse(path: str, content: str):
    if path.endswith(BASELINE_YAML_SUFFIXES):
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise BaselineLoadError(path, f"invalid YAML: {e}") from e
    if not path.endswith(BASELINE_JSON_SUFFIXES):
        logger.warning("Unknown baseline extension for %s, parsing as JSON", path)
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise BaselineLoadError(path, f"invalid JSON: {e}") from e
