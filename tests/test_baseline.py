"""
Unit Tests — Issue Baseline
============================
Tests for loading, narrowing, matching and recording against a baseline
of expected issues. Uses tmp_path for baseline files.
"""
import json
import logging

import pytest

from stress_baseline.core.errors import BaselineLoadError
from stress_baseline.models.expected_issue import ExpectedIssue
from stress_baseline.models.issue_detail import (
    CodeCompleteDetail,
    CursorInfoDetail,
    StressTesterCrashDetail,
)
from stress_baseline.models.issues import ErroredIssue, FailedIssue
from stress_baseline.models.requests import CodeCompleteRequest, CursorInfoRequest, DocumentInfo
from stress_baseline.services.baseline import IssueBaseline, IssueMatch
from stress_baseline.services.codec import encode_expected_issue


SWIFT_CURSOR = ExpectedIssue(
    applicable_configs=frozenset({"main"}),
    issue_url="https://bugs.example.com/1",
    path="*.swift",
    issue_detail=CursorInfoDetail(),
)
SEGFAULT = ExpectedIssue(
    applicable_configs=frozenset({"main", "asan"}),
    issue_url="https://bugs.example.com/2",
    issue_detail=StressTesterCrashDetail(status=11, arguments="*--input*"),
)
ASAN_COMPLETE = ExpectedIssue(
    applicable_configs=frozenset({"asan"}),
    issue_url="https://bugs.example.com/3",
    path="/src/Parser/*",
    issue_detail=CodeCompleteDetail(offset=7),
)


def _cursor(path="Foo.swift", offset=1):
    return FailedIssue(request=CursorInfoRequest(document=DocumentInfo(path=path), offset=offset))


def _complete(path="Foo.swift", offset=7):
    return FailedIssue(request=CodeCompleteRequest(document=DocumentInfo(path=path), offset=offset))


@pytest.fixture
def baseline():
    return IssueBaseline([SWIFT_CURSOR, SEGFAULT, ASAN_COMPLETE])


@pytest.fixture
def baseline_file(tmp_path):
    path = tmp_path / "expected_issues.json"
    path.write_text(json.dumps([encode_expected_issue(i) for i in (SWIFT_CURSOR, SEGFAULT, ASAN_COMPLETE)]))
    return path


# ===========================================================================
# 1. Loading
# ===========================================================================
class TestLoad:

    def test_load_json(self, baseline_file, baseline):
        loaded = IssueBaseline.load(str(baseline_file))
        assert loaded == baseline
        assert len(loaded) == 3

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "expected_issues.yaml"
        path.write_text(
            "- applicableConfigs: [main]\n"
            "  issueUrl: https://bugs.example.com/2\n"
            "  issueDetail:\n"
            "    kind: stressTesterCrash\n"
            "    status: 11\n"
            "    arguments: '*--input*'\n"
        )
        loaded = IssueBaseline.load(str(path))
        assert list(loaded) == [
            ExpectedIssue(
                applicable_configs=frozenset({"main"}),
                issue_url="https://bugs.example.com/2",
                issue_detail=StressTesterCrashDetail(status=11, arguments="*--input*"),
            )
        ]

    def test_missing_file(self, tmp_path):
        with pytest.raises(BaselineLoadError):
            IssueBaseline.load(str(tmp_path / "nope.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{")
        with pytest.raises(BaselineLoadError):
            IssueBaseline.load(str(path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("- [unclosed\n")
        with pytest.raises(BaselineLoadError):
            IssueBaseline.load(str(path))

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "object.json"
        path.write_text('{"issueUrl": "u"}')
        with pytest.raises(BaselineLoadError):
            IssueBaseline.load(str(path))

    def test_bad_record_aborts_load(self, tmp_path):
        path = tmp_path / "expected_issues.json"
        records = [encode_expected_issue(SWIFT_CURSOR), encode_expected_issue(SEGFAULT)]
        records[1]["issueDetail"]["kind"] = "crashed"
        path.write_text(json.dumps(records))
        with pytest.raises(BaselineLoadError) as exc_info:
            IssueBaseline.load(str(path))
        assert exc_info.value.index == 1
        assert "record #1" in str(exc_info.value)

    def test_save_and_reload(self, tmp_path, baseline):
        path = tmp_path / "out.json"
        baseline.save(str(path))
        assert IssueBaseline.load(str(path)) == baseline


# ===========================================================================
# 2. Narrowing
# ===========================================================================
class TestNarrowing:

    def test_for_config(self, baseline):
        assert list(baseline.for_config("main")) == [SWIFT_CURSOR, SEGFAULT]
        assert list(baseline.for_config("asan")) == [SEGFAULT, ASAN_COMPLETE]
        assert len(baseline.for_config("tsan")) == 0

    def test_applicable_to(self, baseline):
        assert list(baseline.applicable_to("/src/Parser/Lexer.swift")) == [SWIFT_CURSOR, SEGFAULT, ASAN_COMPLETE]
        assert list(baseline.applicable_to("/src/Sema/Foo.swift")) == [SWIFT_CURSOR, SEGFAULT]
        assert list(baseline.applicable_to("README.md")) == [SEGFAULT]


# ===========================================================================
# 3. Matching
# ===========================================================================
class TestMatching:

    def test_find_match(self, baseline):
        assert baseline.find_match(_cursor()) == SWIFT_CURSOR
        assert baseline.find_match(_cursor(path="Foo.txt")) is None

    def test_crash(self, baseline):
        crash = ErroredIssue(status=11, file="Foo.swift", arguments="--input Foo.swift")
        assert baseline.find_match(crash) == SEGFAULT
        assert not baseline.is_expected(ErroredIssue(status=9, file="Foo.swift", arguments="--input Foo.swift"))

    def test_config_narrowing_changes_outcome(self, baseline):
        issue = _complete(path="/src/Parser/Lexer.swift")
        assert baseline.for_config("asan").is_expected(issue)
        assert not baseline.for_config("main").is_expected(issue)

    def test_first_match_wins(self):
        specific = ExpectedIssue(
            applicable_configs=frozenset({"main"}),
            issue_url="specific",
            path="Foo.swift",
            issue_detail=CursorInfoDetail(offset=1),
        )
        assert IssueBaseline([specific, SWIFT_CURSOR]).find_match(_cursor()) == specific
        assert IssueBaseline([SWIFT_CURSOR, specific]).find_match(_cursor()) == SWIFT_CURSOR

    def test_partition(self, baseline, caplog):
        known = _cursor()
        novel = _complete(path="Foo.swift", offset=3)
        with caplog.at_level(logging.WARNING):
            expected, unexpected = baseline.partition([known, novel])
        assert expected == [IssueMatch(issue=known, expected=SWIFT_CURSOR)]
        assert unexpected == [novel]
        assert "Unexpected failed issue in Foo.swift" in caplog.text

    def test_empty_baseline_expects_nothing(self):
        assert IssueBaseline().find_match(_cursor()) is None


# ===========================================================================
# 4. Recording
# ===========================================================================
class TestRecord:

    def test_record_appends_exact_record(self, baseline):
        novel = _complete(path="Foo.swift", offset=3)
        updated = baseline.record(novel, issue_url="https://bugs.example.com/4", config="main")
        assert len(baseline) == 3
        assert len(updated) == 4
        assert updated.find_match(novel).issue_url == "https://bugs.example.com/4"
        assert not updated.is_expected(_complete(path="Foo.swift", offset=4))

    def test_recorded_baseline_persists(self, tmp_path, baseline):
        crash = ErroredIssue(status=6, file="Bar.swift", arguments="sk-stress-test Bar.swift")
        updated = baseline.record(crash, issue_url="u", config="tsan")
        path = tmp_path / "expected_issues.json"
        updated.save(str(path))
        assert IssueBaseline.load(str(path)).for_config("tsan").is_expected(crash)


# ===========================================================================
# 5. Configured defaults
# ===========================================================================
class TestConfiguredDefaults:

    def test_load_defaults_to_configured_path(self, monkeypatch, baseline_file, baseline):
        monkeypatch.setattr("stress_baseline.services.baseline.EXPECTED_ISSUES_PATH", str(baseline_file))
        assert IssueBaseline.load() == baseline

    def test_for_config_defaults_to_run_config(self, monkeypatch, baseline):
        monkeypatch.setattr("stress_baseline.services.baseline.STRESS_TESTER_CONFIG", "asan")
        assert list(baseline.for_config()) == [SEGFAULT, ASAN_COMPLETE]
