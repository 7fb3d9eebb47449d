"""Edit request models.

An edit is a tagged variant selected by its ``type`` field. All variants are
frozen: the orchestrator interprets edits but never mutates them.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter

# Anchor field names accepted from agents that use different vocabulary
_AFTER_ANCHOR_ALIASES = AliasChoices(
    "anchor", "search", "match", "after", "pattern", "at", "location"
)
_BEFORE_ANCHOR_ALIASES = AliasChoices(
    "anchor", "search", "match", "before", "pattern", "at", "location"
)


class _EditBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Target path relative to the working directory")


class ReplaceEdit(_EditBase):
    """Replace the first occurrence of ``search`` with ``replace``."""

    type: Literal["replace"] = "replace"
    search: str
    replace: str


class ReplaceAllEdit(_EditBase):
    """Replace every occurrence of ``search`` with ``replace``."""

    type: Literal["replace_all"] = "replace_all"
    search: str
    replace: str


class InsertAfterEdit(_EditBase):
    """Insert ``content`` as new lines after the first line containing ``anchor``."""

    type: Literal["insert_after"] = "insert_after"
    anchor: str = Field(..., validation_alias=_AFTER_ANCHOR_ALIASES)
    content: str


class InsertBeforeEdit(_EditBase):
    """Insert ``content`` as new lines before the first line containing ``anchor``."""

    type: Literal["insert_before"] = "insert_before"
    anchor: str = Field(..., validation_alias=_BEFORE_ANCHOR_ALIASES)
    content: str


class InsertAtLineEdit(_EditBase):
    """Insert ``content`` at a 1-indexed line number."""

    type: Literal["insert_at_line"] = "insert_at_line"
    line: int = Field(..., ge=0)
    content: str


class CreateEdit(_EditBase):
    type: Literal["create"] = "create"
    content: str


class DeleteFileEdit(_EditBase):
    type: Literal["delete_file"] = "delete_file"


class DeleteLinesEdit(_EditBase):
    """Delete lines ``start_line`` through ``end_line`` (1-indexed, inclusive)."""

    type: Literal["delete_lines"] = "delete_lines"
    start_line: int = Field(..., ge=0)
    end_line: int = Field(..., ge=0)


class DeleteMatchEdit(_EditBase):
    """Delete every line containing ``search``."""

    type: Literal["delete_match"] = "delete_match"
    search: str


class AppendEdit(_EditBase):
    type: Literal["append"] = "append"
    content: str


class PrependEdit(_EditBase):
    type: Literal["prepend"] = "prepend"
    content: str


Edit = Annotated[
    Union[
        ReplaceEdit,
        ReplaceAllEdit,
        InsertAfterEdit,
        InsertBeforeEdit,
        InsertAtLineEdit,
        CreateEdit,
        DeleteFileEdit,
        DeleteLinesEdit,
        DeleteMatchEdit,
        AppendEdit,
        PrependEdit,
    ],
    Field(discriminator="type"),
]

_EDIT_ADAPTER = TypeAdapter(Edit)


def parse_edit(data: dict) -> Edit:
    """Validate a single edit dictionary into its variant model."""
    return _EDIT_ADAPTER.validate_python(data)


class EditRequest(BaseModel):
    """Request body for the apply command."""

    edits: List[Edit]
    commit_message: Optional[str] = None
    summary: Optional[str] = None
