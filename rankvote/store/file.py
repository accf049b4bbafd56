"""Local JSON file storage, the fallback when nothing else is configured.

All elections are kept in a single file holding a JSON array of records.
"""

import json
import os
import tempfile
import threading
from typing import Any, Dict, List, Optional

from rankvote.config import DEFAULT_DATA_FILE
from rankvote.store.core import ElectionRepository


class FileElectionRepository(ElectionRepository):
    """Store elections in a local JSON file.

    Every operation reads the whole file; writes replace it atomically
    through a temporary file in the same directory.

    :param path: Path of the JSON file. Its directory is created on the first
        write if needed.
    """
    backend_name = 'file'
    errors = (OSError, ValueError)

    def __init__(self, path: str = DEFAULT_DATA_FILE):
        self.path = path
        self._lock = threading.Lock()

    def load_record(self, election_id: str) -> Optional[Dict[str, Any]]:
        for record in self._read_all():
            if record.get('id') == election_id:
                return record
        return None

    def load_all_records(self) -> List[Dict[str, Any]]:
        return self._read_all()

    def store_record(self, election_id: str, record: Dict[str, Any]) -> None:
        with self._lock:
            records = self._read_all()
            for i, existing in enumerate(records):
                if existing.get('id') == election_id:
                    records[i] = record
                    break
            else:
                records.append(record)
            self._write_all(records)

    def remove_record(self, election_id: str) -> None:
        with self._lock:
            records = self._read_all()
            kept = [rec for rec in records if rec.get('id') != election_id]
            if len(kept) != len(records):
                self._write_all(kept)

    def _read_all(self) -> List[Dict[str, Any]]:
        if not os.path.exists(self.path):
            return []
        with open(self.path, encoding='utf8') as infile:
            records = json.load(infile)
        if not isinstance(records, list):
            raise ValueError(f'{self.path}: JSON array of elections expected')
        return [rec for rec in records if isinstance(rec, dict)]

    def _write_all(self, records: List[Dict[str, Any]]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=directory, prefix='.elections-', suffix='.json'
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf8') as outfile:
                json.dump(records, outfile, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise
