"""
Expected Issue Model
====================
Pydantic model for one baseline record: a known, tracked issue that should be
suppressed instead of being reported as a regression.

Fields (persisted names in parentheses):
    applicable_configs (applicableConfigs) — non-empty set of config identifiers
    issue_url          (issueUrl)          — tracking link, never matched
    path                                   — wildcard pattern for the file, None = any
    modification                           — wildcard pattern for the mutation summary, None = any
    issue_detail       (issueDetail)       — per-kind detail, see issue_detail.py

Matching Rules:
    - An errored observation only matches a stressTesterCrash detail.
    - A failed request only matches a detail of the identical kind; there is
      never any cross-kind matching.
    - Every other field is compared with the pattern matcher, so unset record
      fields act as wildcards.

Used by:
    - IssueBaseline to classify observations as known or unexpected
    - Baseline tooling to turn a new observation into a record (from_issue)
"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_serializer

from stress_baseline.matching.pattern import match_field, match_pattern, match_value
from .issue_detail import DETAIL_BY_KIND, IssueDetail, StressTesterCrashDetail
from .issues import ErroredIssue, FailedIssue, ObservedIssue


class ExpectedIssue(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    applicable_configs: frozenset[StrictStr] = Field(alias="applicableConfigs", min_length=1)
    issue_url: StrictStr = Field(alias="issueUrl")
    path: Optional[StrictStr] = None
    modification: Optional[StrictStr] = None
    issue_detail: IssueDetail = Field(alias="issueDetail")

    @field_serializer("applicable_configs")
    def _sorted_configs(self, configs: frozenset[str]) -> list[str]:
        return sorted(configs)

    # -----------------------------------------------------------------------
    # Matching
    # -----------------------------------------------------------------------
    def matches(self, issue: ObservedIssue) -> bool:
        """
        Check whether an observed issue is covered by this record.

        Parameters
        ----------
        issue : ObservedIssue
            A FailedIssue or ErroredIssue reported by the stress tester.

        Returns
        -------
        bool
            True if every constrained field matches. Shape mismatches are
            False, never errors.
        """
        if isinstance(issue, ErroredIssue):
            detail = self.issue_detail
            if not isinstance(detail, StressTesterCrashDetail):
                return False
            return (
                match_pattern(issue.file, self.path)
                and match_value(issue.status, detail.status)
                and match_pattern(issue.arguments, detail.arguments)
            )
        if isinstance(issue, FailedIssue):
            return self._matches_request(issue.request)
        return False

    def _matches_request(self, request) -> bool:
        detail = self.issue_detail
        if detail.kind != request.kind:
            return False
        if not match_pattern(request.document.path, self.path):
            return False
        if not match_pattern(request.document.modification, self.modification):
            return False
        return all(
            match_field(getattr(request, name), value)
            for name, value in detail.payload().items()
        )

    def is_applicable(self, path: str) -> bool:
        """Check whether this record could match a request made in the given file."""
        return match_pattern(path, self.path)

    # -----------------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------------
    @classmethod
    def from_issue(cls, issue: ObservedIssue, issue_url: str, config: str) -> "ExpectedIssue":
        """
        Build a record that matches exactly the given observation.

        All fields are copied verbatim, with no wildcards; a person widens the
        record afterwards by editing it.

        Parameters
        ----------
        issue : ObservedIssue
            The newly observed issue.
        issue_url : str
            Tracking link to store on the record.
        config : str
            The config identifier the issue was observed under.
        """
        if isinstance(issue, ErroredIssue):
            return cls(
                applicable_configs=frozenset({config}),
                issue_url=issue_url,
                path=issue.file,
                modification=None,
                issue_detail=StressTesterCrashDetail(status=issue.status, arguments=issue.arguments),
            )

        request = issue.request
        detail_cls = DETAIL_BY_KIND[request.kind]
        return cls(
            applicable_configs=frozenset({config}),
            issue_url=issue_url,
            path=request.document.path,
            modification=request.document.modification,
            issue_detail=detail_cls(**{name: getattr(request, name) for name in detail_cls.payload_fields()}),
        )
