"""
Observed Issue Models
=====================
Pydantic models for what the stress tester observed while exercising the service.

    FailedIssue   — the service answered a specific request with an invalid
                    or error response
    ErroredIssue  — the service process itself crashed or exited abnormally

ObservedIssue is the tagged union of the two, discriminated by ``kind``.
"""
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictInt

from stress_baseline.core.constants import INT32_MAX, INT32_MIN
from .requests import RequestInfo


class FailedIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["failed"] = "failed"
    request: RequestInfo
    response: str = ""  # offending response text, diagnostics only


class ErroredIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["errored"] = "errored"
    status: Optional[StrictInt] = Field(default=None, ge=INT32_MIN, le=INT32_MAX)
    file: str
    arguments: str


ObservedIssue = Annotated[Union[FailedIssue, ErroredIssue], Field(discriminator="kind")]
