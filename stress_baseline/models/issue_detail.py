"""
Issue Detail Models
===================
The ``issueDetail`` part of an expected issue: one variant per request kind
plus ``stressTesterCrash`` for a crashed service process.

Every payload field is optional. None means the baseline does not constrain
that field. Field names are the same as the corresponding request fields so
the matching engine can compare them by name.

Strict types:
    offset/length/status are StrictInt and text/refactoring/arguments are
    StrictStr, so a persisted "12" is a decode failure rather than 12.
"""
from typing import Annotated, Literal, Optional, Union, get_args
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from stress_baseline.core.constants import INT32_MAX, INT32_MIN, ISSUE_DETAIL_KINDS
from .requests import check_kind_registry


class _IssueDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    @classmethod
    def payload_fields(cls) -> tuple[str, ...]:
        """Names of the wildcardable fields this variant carries (everything but kind)."""
        return tuple(name for name in cls.model_fields if name != "kind")

    def payload(self) -> dict:
        return {name: getattr(self, name) for name in self.payload_fields()}


class EditorOpenDetail(_IssueDetail):
    kind: Literal["editorOpen"] = "editorOpen"


class EditorCloseDetail(_IssueDetail):
    kind: Literal["editorClose"] = "editorClose"


class EditorReplaceTextDetail(_IssueDetail):
    kind: Literal["editorReplaceText"] = "editorReplaceText"
    offset: Optional[StrictInt] = None
    length: Optional[StrictInt] = None
    text: Optional[StrictStr] = None


class CursorInfoDetail(_IssueDetail):
    kind: Literal["cursorInfo"] = "cursorInfo"
    offset: Optional[StrictInt] = None


class CodeCompleteDetail(_IssueDetail):
    kind: Literal["codeComplete"] = "codeComplete"
    offset: Optional[StrictInt] = None


class RangeInfoDetail(_IssueDetail):
    kind: Literal["rangeInfo"] = "rangeInfo"
    offset: Optional[StrictInt] = None
    length: Optional[StrictInt] = None


class SemanticRefactoringDetail(_IssueDetail):
    kind: Literal["semanticRefactoring"] = "semanticRefactoring"
    offset: Optional[StrictInt] = None
    refactoring: Optional[StrictStr] = None


class TypeContextInfoDetail(_IssueDetail):
    kind: Literal["typeContextInfo"] = "typeContextInfo"
    offset: Optional[StrictInt] = None


class ConformingMethodListDetail(_IssueDetail):
    kind: Literal["conformingMethodList"] = "conformingMethodList"
    offset: Optional[StrictInt] = None


class CollectExpressionTypeDetail(_IssueDetail):
    kind: Literal["collectExpressionType"] = "collectExpressionType"


class StressTesterCrashDetail(_IssueDetail):
    kind: Literal["stressTesterCrash"] = "stressTesterCrash"
    status: Optional[StrictInt] = Field(default=None, ge=INT32_MIN, le=INT32_MAX)
    arguments: Optional[StrictStr] = None


IssueDetail = Annotated[
    Union[
        EditorOpenDetail,
        EditorCloseDetail,
        EditorReplaceTextDetail,
        CursorInfoDetail,
        CodeCompleteDetail,
        RangeInfoDetail,
        SemanticRefactoringDetail,
        TypeContextInfoDetail,
        ConformingMethodListDetail,
        CollectExpressionTypeDetail,
        StressTesterCrashDetail,
    ],
    Field(discriminator="kind"),
]


# kind → detail class, used when building a record from an observed request
DETAIL_BY_KIND: dict[str, type[_IssueDetail]] = {
    cls.model_fields["kind"].default: cls
    for cls in get_args(get_args(IssueDetail)[0])
}

check_kind_registry(DETAIL_BY_KIND, ISSUE_DETAIL_KINDS, "issueDetail")
