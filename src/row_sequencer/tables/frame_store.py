import threading
import logging
from pathlib import Path
from typing import Any, Sequence

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from ..errors import ConfigurationError, StorageWriteFailure
from ..helpers.files import infer_delim, infer_encoding
from ..helpers.parsing import parse_timestamp, strict_parse_int

logger = logging.getLogger(__name__)


class FrameTabularStore:
    """
    Tabular store over a pandas DataFrame, one frame row per data row.

    The id column is held with object dtype so cells keep whatever was
    written to them, including junk left behind by manual edits.
    """

    def __init__(
        self,
        frame: pd.DataFrame,
        id_column: str = "ID",
        *,
        timestamp_column: str | None = "submitted_at",
    ):
        self.id_column = self._resolve_column(frame, id_column)
        self.timestamp_column = timestamp_column
        self.frame = frame.reset_index(drop=True)
        self.frame[self.id_column] = self.frame[self.id_column].astype(object)
        self._col_pos = self.frame.columns.get_loc(self.id_column)
        self._guard = threading.RLock()

    @staticmethod
    def _resolve_column(frame: pd.DataFrame, name: str) -> str:
        if name in frame.columns:
            return name
        for col in frame.columns:
            if str(col).strip().lower() == name.lower():
                return col
        raise ConfigurationError(f'ID column "{name}" not found')

    @classmethod
    def empty(cls, id_column: str = "ID", columns: Sequence[str] = ("submitted_at",)) -> "FrameTabularStore":
        frame = pd.DataFrame(columns=[id_column, *columns])
        return cls(frame, id_column)

    @classmethod
    def from_file(cls, path: Path, id_column: str = "ID", **kwargs: Any) -> "FrameTabularStore":
        path = Path(path)
        if path.suffix.lower() == ".parquet":
            frame = pq.read_table(path).to_pandas()
        else:
            encoding = infer_encoding(path)
            delimiter = infer_delim(path, encoding=encoding)
            logger.debug(f"Reading {path.name} (encoding={encoding}, delimiter={delimiter!r})")
            frame = pd.read_csv(
                path,
                sep=delimiter,
                encoding=encoding,
                dtype=object,
                keep_default_na=False,
            )
        return cls(frame, id_column, **kwargs)

    def to_file(self, path: Path) -> None:
        path = Path(path)
        with self._guard:
            frame = self.frame.copy()
        if path.suffix.lower() == ".parquet":
            # arrow needs a single type per column
            frame[self.id_column] = pd.array(
                [strict_parse_int(v) for v in frame[self.id_column]], dtype="Int64"
            )
            pq.write_table(pa.Table.from_pandas(frame, preserve_index=False), path)
        else:
            frame.to_csv(path, index=False)

    def last_row(self) -> int:
        with self._guard:
            return len(self.frame) + 1

    def read_ids(self, start_row: int, count: int) -> list[Any]:
        if start_row < 2 or count <= 0:
            return []
        pos = start_row - 2
        with self._guard:
            return self.frame.iloc[pos:pos + count, self._col_pos].tolist()

    def read_id(self, row: int) -> Any:
        values = self.read_ids(row, 1)
        return values[0] if values else None

    def write_ids(self, start_row: int, values: Sequence[Any]) -> None:
        values = list(values)
        if not values:
            return
        pos = start_row - 2
        with self._guard:
            if pos < 0 or pos + len(values) > len(self.frame):
                raise StorageWriteFailure(
                    f"Rows {start_row}..{start_row + len(values) - 1} extend past the last row"
                )
            column = self.frame[self.id_column].copy()
            for offset, value in enumerate(values):
                column.iat[pos + offset] = value
            self.frame[self.id_column] = column

    def write_id(self, row: int, value: Any) -> None:
        self.write_ids(row, [value])

    def append(self, payload: dict[str, Any] | None = None, submitted_at: Any = None) -> int:
        """
        Append a row with no id and return its row number. Payload keys become
        columns.
        """
        record: dict[str, Any] = dict(payload or {})
        record[self.id_column] = None
        if self.timestamp_column:
            record[self.timestamp_column] = parse_timestamp(submitted_at) or pd.Timestamp.now().to_pydatetime()
        with self._guard:
            addition = pd.DataFrame([record], columns=list(dict.fromkeys([*self.frame.columns, *record])))
            addition[self.id_column] = addition[self.id_column].astype(object)
            if self.frame.empty:
                self.frame = addition.reset_index(drop=True)
            else:
                self.frame = pd.concat([self.frame, addition], ignore_index=True)
            self.frame[self.id_column] = self.frame[self.id_column].astype(object)
            self._col_pos = self.frame.columns.get_loc(self.id_column)
            return len(self.frame) + 1
