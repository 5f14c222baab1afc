"""
Record Storage for Train Logger

This module persists log records as a JSON list on disk. Writes go to a
temporary sibling file that is then renamed over the target, so an
interrupted write leaves the previous file intact. A corrupt file is
discarded and the store starts empty rather than failing to load.
"""

import json
import logging
import os
from pathlib import Path
from typing import Iterable, List, Union
from . import constants
from .errors import RecordStoreError
from .models import LogRecord

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Durable, insertion-ordered storage of LogRecords.

    Args:
        file_path: JSON file holding the records. Defaults to
            DEFAULT_RECORDS_FILE.
    """

    def __init__(self, file_path: Union[str, Path] = constants.DEFAULT_RECORDS_FILE):
        self.file_path = Path(file_path)
        self.tmp_path = self.file_path.with_suffix(".tmp")
        self._records: List[LogRecord] = []
        self._load_from_disk()

    @property
    def count(self) -> int:
        return len(self._records)

    def get_all(self) -> List[LogRecord]:
        """All records in insertion order."""
        return list(self._records)

    def add(self, record: LogRecord) -> None:
        self.add_all([record])

    def add_all(self, records: Iterable[LogRecord]) -> None:
        """
        Append records and persist them with a single write.

        Raises:
            RecordStoreError: If the file cannot be written. The records
                stay in memory and are written with the next successful save.
        """
        self._records.extend(records)
        self._save_to_disk()

    def clear_all(self) -> None:
        self._records.clear()
        self._save_to_disk()

    def _load_from_disk(self) -> None:
        if not self.file_path.exists():
            self._records = []
            return

        try:
            text = self.file_path.read_text(encoding="utf-8")
            if not text.strip():
                self._records = []
                return
            payload = json.loads(text)
            if not isinstance(payload, list):
                raise ValueError("expected a JSON list of records")
            self._records = [LogRecord.from_dict(item) for item in payload]
            logger.info("Loaded %s records from %s", len(self._records), self.file_path)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Corrupt record file %s, starting empty: %s", self.file_path, exc)
            self._records = []
            try:
                self.file_path.unlink()
            except OSError as unlink_exc:
                logger.warning("Could not remove %s: %s", self.file_path, unlink_exc)

    def _save_to_disk(self) -> None:
        body = json.dumps([record.to_dict() for record in self._records])
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with self.tmp_path.open("w", encoding="utf-8") as handle:
                handle.write(body)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(self.tmp_path, self.file_path)
        except OSError as exc:
            raise RecordStoreError(f"Failed to save records to {self.file_path}: {exc}") from exc
