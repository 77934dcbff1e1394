"""
Expected Issue Codec
====================
Encodes ExpectedIssue records to, and decodes them from, the persisted
baseline shape:

    {
      "applicableConfigs": ["main"],
      "issueUrl": "https://...",
      "path": "*.swift",
      "modification": null,
      "issueDetail": {"kind": "cursorInfo", "offset": null}
    }

Contract:
    - issueDetail always carries ``kind`` plus exactly that kind's fields;
      unset fields are written as null and read back as unset.
    - Decoding reads ``kind`` first and only the fields valid for it.
      Unknown/missing kind or a wrongly typed field raises
      ExpectedIssueDecodeError. A corrupt record is never skipped.
"""
import json
import logging
from typing import Any, Iterable

from pydantic import ValidationError

from stress_baseline.core.errors import ExpectedIssueDecodeError
from stress_baseline.models.expected_issue import ExpectedIssue

logger = logging.getLogger(__name__)

# Field names accepted when building records in Python but not part of the
# persisted shape (applicable_configs, issue_url, issue_detail)
_PYTHON_ONLY_NAMES = frozenset(
    name for name, field in ExpectedIssue.model_fields.items()
    if field.alias and field.alias != name
)


def encode_expected_issue(issue: ExpectedIssue) -> dict[str, Any]:
    """Encode a record into its persisted (camelCase) dictionary form."""
    return issue.model_dump(mode="json", by_alias=True)


def decode_expected_issue(data: Any) -> ExpectedIssue:
    """
    Decode one persisted record.

    Parameters
    ----------
    data : Any
        A mapping parsed from JSON or YAML.

    Returns
    -------
    ExpectedIssue
        The decoded, immutable record.

    Raises
    ------
    ExpectedIssueDecodeError
        If the record is not a mapping, uses snake_case keys, its issueDetail
        kind is missing or unrecognised, or any field has the wrong type.
    """
    if not isinstance(data, dict):
        raise ExpectedIssueDecodeError(
            f"expected an object, got {type(data).__name__}"
        )
    python_names = sorted(set(data) & _PYTHON_ONLY_NAMES)
    if python_names:
        raise ExpectedIssueDecodeError(
            f"unknown keys {python_names}; persisted records use camelCase names"
        )
    try:
        return ExpectedIssue.model_validate(data)
    except ValidationError as e:
        logger.debug("Rejected expected issue record: %s", e)
        raise ExpectedIssueDecodeError(_summarize(e), errors=e.errors()) from e


def dumps_expected_issues(issues: Iterable[ExpectedIssue], indent: int = 2) -> str:
    """Serialize records as a JSON array."""
    return json.dumps([encode_expected_issue(i) for i in issues], indent=indent)


def loads_expected_issues(text: str) -> list[ExpectedIssue]:
    """Parse a JSON array of records. Any bad record aborts the whole load."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExpectedIssueDecodeError(f"invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise ExpectedIssueDecodeError(
            f"expected an array of expected issues, got {type(data).__name__}"
        )
    return [decode_expected_issue(item) for item in data]


def _summarize(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(p) for p in err.get("loc", ())) or "<record>"
        parts.append(f"{location}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)
