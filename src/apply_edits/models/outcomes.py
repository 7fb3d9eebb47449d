"""Per-edit outcomes and the overall apply result.

These models define the JSON shape written to stdout by the CLI, so they
serialize with ``type`` for the edit tag and omit empty optional fields.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from apply_edits.models.enums import OutcomeStatus


class ClosestMatch(BaseModel):
    """A ranked candidate offered when an exact/normalized match fails."""

    line: int = Field(..., description="1-indexed line where the window starts")
    similarity: float = Field(..., ge=0.0, le=1.0)
    content: str = Field(..., description="Literal text of the matched window")
    context_before: List[str] = Field(default_factory=list)
    context_after: List[str] = Field(default_factory=list)


class _OutcomeBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    index: int
    path: str
    edit_type: str = Field(..., alias="type")

    @property
    def is_success(self) -> bool:
        return self.status != OutcomeStatus.ERROR

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dict with the public field names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class OkOutcome(_OutcomeBase):
    status: Literal[OutcomeStatus.OK] = OutcomeStatus.OK
    lines_affected: Optional[List[int]] = None
    message: Optional[str] = None


class WarningOutcome(_OutcomeBase):
    """The edit succeeded but something is worth flagging."""

    status: Literal[OutcomeStatus.WARNING] = OutcomeStatus.WARNING
    warning: str
    message: str


class ErrorOutcome(_OutcomeBase):
    status: Literal[OutcomeStatus.ERROR] = OutcomeStatus.ERROR
    error: str = Field(..., description="Machine-readable error kind")
    message: str
    search_preview: Optional[str] = None
    closest_matches: Optional[List[ClosestMatch]] = None
    hint: Optional[str] = None

    @classmethod
    def from_error(cls, index: int, path: str, edit_type: str, error) -> "ErrorOutcome":
        """Build an error outcome from an ``EditError``."""
        return cls(
            index=index,
            path=path,
            edit_type=edit_type,
            error=error.code,
            message=error.message,
            search_preview=error.search_preview,
            closest_matches=error.closest_matches,
            hint=error.hint,
        )


EditOutcome = Union[OkOutcome, WarningOutcome, ErrorOutcome]


class ApplyResult(BaseModel):
    """Overall result of applying a batch of edits."""

    success: bool = True
    applied: int = 0
    failed: int = 0
    edits: List[EditOutcome] = Field(default_factory=list)

    def add_outcome(self, outcome: EditOutcome) -> None:
        if outcome.is_success:
            self.applied += 1
        else:
            self.failed += 1
            self.success = False
        self.edits.append(outcome)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "applied": self.applied,
            "failed": self.failed,
            "edits": [outcome.to_dict() for outcome in self.edits],
        }
