import csv
import logging
from typing import Iterable, List, Mapping, Optional, Type

from pydantic import ValidationError

from .exceptions import RecordValidationError
from .models import IncomingRecord, LibraryRecord
from .schemas import SeriesRow, TitledRow

logger = logging.getLogger(__name__)


class RecordLoader:
    """
    Loads import rows into engine records.

    Rows are plain mappings (decoded JSON, database rows, CSV lines) using the
    import-source keys (``titre``, ``titre_romaji``, ``mal_id``...).
    """
    def __init__(self, row_schema: Type[TitledRow] = SeriesRow):
        self.row_schema = row_schema

    def load_library(self, rows: Iterable[Mapping]) -> List[LibraryRecord]:
        records: List[LibraryRecord] = []
        for index, row in enumerate(rows):
            parsed = self._parse_row(row, index)
            try:
                records.append(parsed.to_library_record())
            except ValueError as e:
                raise RecordValidationError(f"Row {index}: {e}", row_index=index) from e
        return records

    def load_incoming(self, rows: Iterable[Mapping], source: Optional[str] = None) -> List[IncomingRecord]:
        records: List[IncomingRecord] = []
        for index, row in enumerate(rows):
            parsed = self._parse_row(row, index)
            label = f"{source}#{index}" if source else None
            record = parsed.to_incoming_record(source_label=label)
            if not record.titles and record.external_id is None:
                logger.debug(f"Skipping row {index}: no title and no external id")
                continue
            records.append(record)
        return records

    def load_library_csv(self, csv_path: str) -> List[LibraryRecord]:
        return self.load_library(self._read_csv(csv_path))

    def load_incoming_csv(self, csv_path: str, source: Optional[str] = None) -> List[IncomingRecord]:
        return self.load_incoming(self._read_csv(csv_path), source=source)

    def _read_csv(self, csv_path: str) -> List[dict]:
        with open(csv_path, newline="", encoding="utf-8") as f:
            return list(csv.DictReader(f))

    def _parse_row(self, row: Mapping, index: int) -> TitledRow:
        try:
            return self.row_schema.model_validate(dict(row))
        except ValidationError as e:
            raise RecordValidationError(f"Row {index}: {e}", row_index=index) from e
