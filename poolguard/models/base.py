from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SourceLocation(BaseModel):
    """Position of a syntax node inside a source file."""

    model_config = ConfigDict(frozen=True)

    file_path: Path = Field(..., description="Path to the source file")
    line_start: int = Field(..., ge=1, description="Starting line number (1-based)")
    column_start: int = Field(..., ge=1, description="Starting column (1-based)")
    line_end: int = Field(..., ge=1, description="Ending line number (1-based)")
    column_end: int = Field(..., ge=1, description="Ending column (1-based)")
    start_byte: int = Field(default=0, ge=0)
    end_byte: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_line_range(self) -> Self:
        """Ensure line_end is not before line_start."""

        if self.line_end < self.line_start:
            raise ValueError("line_end must be greater than or equal to line_start")
        return self

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line_start}:{self.column_start}"
