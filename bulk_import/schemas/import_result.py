"""
bulk_import/schemas/import_result.py

Response schemas for the batch-import endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class _ResultModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class ImportSummary(_ResultModel):
    """
    Record counts for one batch.
    """

    total: int = Field(0, ge=0)
    imported: int = Field(0, ge=0)
    skipped: int = Field(0, ge=0)
    failed: int = Field(0, ge=0)
    validated: int | None = None


class RecordError(_ResultModel):
    """
    Validation messages for one submitted record.
    """

    index: int = Field(..., ge=0)
    errors: list[str] = Field(default_factory=list)
    record: Any | None = None

    @property
    def record_number(self) -> int:
        return self.index + 1


class SkippedRecord(_ResultModel):
    reason: str
    index: int | None = None
    record: Any | None = None


class ImageWarning(_ResultModel):
    reason: str
    field: str | None = None
    index: int | None = None
    record: Any | None = None


class ImportResult(_ResultModel):
    """
    Structured outcome of one batch-import call. Never mutated client-side.
    """

    success: bool
    message: str = ""
    summary: ImportSummary = Field(default_factory=ImportSummary)
    errors: list[RecordError] = Field(default_factory=list)
    skipped_records: list[SkippedRecord] = Field(
        default_factory=list,
        validation_alias=AliasChoices("skippedRecords", "skipped", "skipped_records"),
    )
    image_warnings: list[ImageWarning] = Field(
        default_factory=list,
        validation_alias=AliasChoices("imageWarnings", "image_warnings"),
    )
    error: str | None = None
