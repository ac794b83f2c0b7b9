import csv
import io
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

def cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)

class Table:
    """
    Row-oriented table: ordered column names plus one ordered mapping per row.
    Columns keep insertion order, so extra caller columns pass through in place.
    """

    def __init__(self, columns: Sequence[str], rows: Optional[Iterable[Mapping[str, Any]]] = None):
        self.columns: List[str] = list(dict.fromkeys(columns))
        self.rows: List[Dict[str, Any]] = []
        for row in rows or []:
            self.rows.append({c: row.get(c) for c in self.columns})

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "Table":
        records = list(records)
        columns: Dict[str, None] = {}
        for r in records:
            for key in r.keys():
                columns.setdefault(str(key), None)
        return cls(list(columns), records)

    @classmethod
    def from_columns(cls, data: Mapping[str, Sequence[Any]]) -> "Table":
        lengths = {name: len(values) for name, values in data.items()}
        if len(set(lengths.values())) > 1:
            raise ValueError(f"columns must have equal length, got {lengths}")
        n = next(iter(lengths.values()), 0)
        rows = [{name: values[i] for name, values in data.items()} for i in range(n)]
        return cls(list(data), rows)

    @classmethod
    def from_csv(cls, text: str, delimiter: str = ",") -> "Table":
        reader = csv.DictReader(io.StringIO(text), delimiter=delimiter)
        if not reader.fieldnames:
            raise ValueError("csv input has no header row")
        header = [name.strip() for name in reader.fieldnames]
        dupes = sorted({name for name in header if header.count(name) > 1})
        if dupes:
            raise ValueError(f"csv header repeats column(s): {', '.join(dupes)}")
        rows = []
        for raw in reader:
            # DictReader keys overflow cells under None; those have no column to go to
            rows.append({name.strip(): value for name, value in raw.items() if name is not None})
        return cls(header, rows)

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    def has_columns(self, *names: str) -> bool:
        return all(n in self.columns for n in names)

    def with_default_column(self, name: str, value: Any) -> "Table":
        if name in self.columns:
            return self
        return Table(self.columns + [name], ({**row, name: value} for row in self.rows))

    def __len__(self) -> int:
        return len(self.rows)

    def __repr__(self) -> str:
        return f"Table(columns={self.columns!r}, rows={len(self.rows)})"
