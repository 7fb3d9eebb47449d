"""Models for line-numbered file reads."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class FileReadResult(BaseModel):
    """Result of reading a single file."""

    path: str
    exists: bool
    lines: Optional[int] = Field(None, description="Total line count of the file")
    bytes: Optional[int] = Field(None, description="File size in bytes")
    truncated: Optional[bool] = None
    content: Optional[str] = None
    content_with_line_numbers: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class MultiFileReadResult(BaseModel):
    files: List[FileReadResult] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"files": [f.to_dict() for f in self.files]}
