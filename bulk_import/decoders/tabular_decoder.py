"""
bulk_import/decoders/tabular_decoder.py

Spreadsheet decoder: first worksheet -> flat rows -> normalized records.

Sheet-level structural problems are fatal for the whole file, unlike the
tolerant per-cell coercion done by ``RowNormalizer``.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable
from typing import Any

import pandas as pd

from bulk_import.decoders.errors import (
    EmptyWorkbook,
    NoDataRows,
    WorkbookUnreadable,
    ensure_row_ceiling,
)
from bulk_import.domain.entity_kind import EntityKind
from bulk_import.domain.records import NormalizedRecord, Scalar
from bulk_import.mappers.field_classifier import FieldClassifier
from bulk_import.mappers.row_normalizer import RowNormalizer

logger = logging.getLogger(__name__)


def open_workbook(content: bytes) -> pd.ExcelFile:
    """
    Open workbook bytes; pandas picks openpyxl (.xlsx) or xlrd (.xls).
    """

    return pd.ExcelFile(io.BytesIO(content))


class TabularDecoder:
    """
    Reads the first sheet of a workbook using its header row as field paths.
    """

    def __init__(
        self,
        *,
        max_rows: int | None = None,
        log_fallbacks: bool = True,
        classifier: FieldClassifier | None = None,
        workbook_opener: Callable[[bytes], Any] | None = None,
    ) -> None:
        self._max_rows = max_rows
        self._log_fallbacks = log_fallbacks
        self._classifier = classifier or FieldClassifier()
        self._open_workbook = workbook_opener or open_workbook

    def decode(self, content: bytes, entity_kind: EntityKind) -> list[NormalizedRecord]:
        rows = self.read_rows(content)
        if not rows:
            raise NoDataRows()
        ensure_row_ceiling(len(rows), self._max_rows)

        normalizer = RowNormalizer(
            entity_kind,
            classifier=self._classifier,
            log_fallbacks=self._log_fallbacks,
        )
        records = [normalizer.normalize(row) for row in rows]
        logger.info(
            "Decoded spreadsheet upload entity_kind=%s records=%s",
            entity_kind.value,
            len(records),
        )
        return records

    def read_rows(self, content: bytes) -> list[dict[str, Scalar]]:
        """
        Return the first sheet as flat rows; empty cells become ``None``.
        """

        try:
            workbook = self._open_workbook(content)
        except Exception as exc:  # noqa: BLE001
            raise WorkbookUnreadable(str(exc) or exc.__class__.__name__) from exc

        try:
            sheet_names = list(workbook.sheet_names)
            if not sheet_names:
                raise EmptyWorkbook()
            try:
                frame = pd.read_excel(
                    workbook,
                    sheet_name=sheet_names[0],
                    dtype=str,
                    keep_default_na=False,
                    na_values=[""],
                )
            except Exception as exc:  # noqa: BLE001
                raise WorkbookUnreadable(str(exc) or exc.__class__.__name__) from exc
        finally:
            workbook.close()

        frame = frame.dropna(how="all")
        frame = frame.astype(object).where(frame.notna(), None)
        return [
            {str(column): value for column, value in row.items()}
            for row in frame.to_dict(orient="records")
        ]
