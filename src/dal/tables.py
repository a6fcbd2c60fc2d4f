"""In-memory tabular results filled by a data adapter."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass
class DataTable:
    """
    One named result set: column names plus the fetched rows.

    Rows are kept as tuples in the order the driver returned them.
    """

    name: str = "Table"
    columns: list[str] = field(default_factory=list)
    rows: list[tuple[Any, ...]] = field(default_factory=list)

    def copy(self) -> DataTable:
        """Detached copy with its own column and row lists."""
        return DataTable(name=self.name, columns=list(self.columns), rows=list(self.rows))

    def records(self) -> list[dict[str, Any]]:
        """Rows as dicts keyed by column name."""
        return [dict(zip(self.columns, row, strict=False)) for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        return iter(self.rows)


class DataSet:
    """
    Ordered collection of :class:`DataTable` objects.

    Tables added without a name are called ``Table``, ``Table1``, ``Table2``
    and so on.
    """

    def __init__(self, tables: Sequence[DataTable] | None = None):
        self._tables: list[DataTable] = []
        for table in tables or ():
            self.add_table(table)

    @property
    def tables(self) -> list[DataTable]:
        return self._tables

    @property
    def table_names(self) -> list[str]:
        return [table.name for table in self._tables]

    def next_table_name(self) -> str:
        count = len(self._tables)
        return "Table" if count == 0 else f"Table{count}"

    def add_table(self, table: DataTable) -> DataTable:
        if not table.name:
            table.name = self.next_table_name()
        self._tables.append(table)
        return table

    def __getitem__(self, key: int | str) -> DataTable:
        if isinstance(key, str):
            for table in self._tables:
                if table.name == key:
                    return table
            raise KeyError(key)
        return self._tables[key]

    def __len__(self) -> int:
        return len(self._tables)

    def __iter__(self) -> Iterator[DataTable]:
        return iter(self._tables)

    def __repr__(self) -> str:
        return f"DataSet(tables={self.table_names!r})"


__all__ = [
    "DataTable",
    "DataSet",
]
