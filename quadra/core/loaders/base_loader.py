"""Provides the abstract base loader class for reading point files into DataFrames."""

import io
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

import pandas as pd


class BaseLoader(ABC):
    """Base class for file loaders."""

    def __init__(self, source: Union[str, Path, io.IOBase]):
        """
        Args:
            source: File path (str/Path) or file-like object
        """
        if isinstance(source, (str, Path)):
            self.path = Path(source)
            self.file_obj = None
        else:
            self.path = None
            self.file_obj = source

    def load(self) -> pd.DataFrame:
        """Load data from source."""
        if self.path:
            with open(self.path, 'r', encoding='utf-8') as f:
                return self._load_from_file(f)
        else:
            if hasattr(self.file_obj, 'seek'):
                self.file_obj.seek(0)
            return self._load_from_file(self.file_obj)

    @abstractmethod
    def _load_from_file(self, file_handle) -> pd.DataFrame:
        """Load from open file handle. Subclasses implement."""
        pass

    @property
    @abstractmethod
    def _error_class(self):
        """Return the exception class for this loader."""
        pass

    def _load_jsonl(self, file_handle) -> list[dict]:
        """Helper: Load one JSON object per non-blank line."""
        records = []

        for i, line in enumerate(file_handle, start=1):
            if isinstance(line, bytes):
                line = line.decode('utf-8')
            if not line.strip():
                continue

            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise self._error_class(f"Invalid JSON on line {i}: {e}") from e

            if not isinstance(record, dict):
                raise self._error_class(f"Line {i} must hold a JSON object")

            records.append(record)

        return records
