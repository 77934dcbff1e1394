"""
Request Models
==============
Pydantic models for the requests the stress tester issues against the
code-intelligence service. Each request is one variant of the RequestInfo
tagged union, discriminated by its ``kind`` field.

Common fields:
    kind        — one of REQUEST_KINDS (e.g. "cursorInfo")
    document    — the document the request was made in

Kind-specific fields:
    offset, length, text, refactoring — compared against baseline records
    args, type_list                   — carried for diagnostics, never compared
"""
from typing import Annotated, List, Literal, Optional, Union, get_args
from pydantic import BaseModel, ConfigDict, Field

from stress_baseline.core.constants import REQUEST_KINDS


class DocumentInfo(BaseModel):
    """A source document the request targets, with its mutation summary code."""
    model_config = ConfigDict(frozen=True)

    path: str
    modification: Optional[str] = None


class _Request(BaseModel):
    model_config = ConfigDict(frozen=True)

    document: DocumentInfo

    @property
    def path(self) -> str:
        return self.document.path

    @property
    def modification(self) -> Optional[str]:
        return self.document.modification


class EditorOpenRequest(_Request):
    kind: Literal["editorOpen"] = "editorOpen"


class EditorCloseRequest(_Request):
    kind: Literal["editorClose"] = "editorClose"


class EditorReplaceTextRequest(_Request):
    kind: Literal["editorReplaceText"] = "editorReplaceText"
    offset: int
    length: int
    text: str


class CursorInfoRequest(_Request):
    kind: Literal["cursorInfo"] = "cursorInfo"
    offset: int
    args: List[str] = []


class CodeCompleteRequest(_Request):
    kind: Literal["codeComplete"] = "codeComplete"
    offset: int
    args: List[str] = []


class RangeInfoRequest(_Request):
    kind: Literal["rangeInfo"] = "rangeInfo"
    offset: int
    length: int
    args: List[str] = []


class SemanticRefactoringRequest(_Request):
    kind: Literal["semanticRefactoring"] = "semanticRefactoring"
    offset: int
    refactoring: str
    args: List[str] = []


class TypeContextInfoRequest(_Request):
    kind: Literal["typeContextInfo"] = "typeContextInfo"
    offset: int
    args: List[str] = []


class ConformingMethodListRequest(_Request):
    kind: Literal["conformingMethodList"] = "conformingMethodList"
    offset: int
    type_list: List[str] = []
    args: List[str] = []


class CollectExpressionTypeRequest(_Request):
    kind: Literal["collectExpressionType"] = "collectExpressionType"
    args: List[str] = []


RequestInfo = Annotated[
    Union[
        EditorOpenRequest,
        EditorCloseRequest,
        EditorReplaceTextRequest,
        CursorInfoRequest,
        CodeCompleteRequest,
        RangeInfoRequest,
        SemanticRefactoringRequest,
        TypeContextInfoRequest,
        ConformingMethodListRequest,
        CollectExpressionTypeRequest,
    ],
    Field(discriminator="kind"),
]


REQUEST_BY_KIND: dict[str, type[_Request]] = {
    cls.model_fields["kind"].default: cls
    for cls in get_args(get_args(RequestInfo)[0])
}


def check_kind_registry(registry: dict, kinds: tuple, label: str) -> None:
    """Fail loudly when the model variants and the declared kind names drift apart."""
    missing = set(kinds) - set(registry)
    extra = set(registry) - set(kinds)
    if missing or extra:
        raise RuntimeError(
            f"{label} variants out of sync: missing={sorted(missing)} unexpected={sorted(extra)}"
        )


check_kind_registry(REQUEST_BY_KIND, REQUEST_KINDS, "request")
