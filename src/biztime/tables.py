"""
Server-defined table registry.

Only the tables and columns listed here may appear in identifier position
of a generated statement. Values are always bound through placeholders.
"""

from dataclasses import dataclass

from psycopg import sql

from biztime.result import ValidationError


@dataclass(frozen=True)
class Table:
    name: str
    primary_key: str
    columns: tuple[str, ...]

    @property
    def identifier(self) -> sql.Identifier:
        return sql.Identifier(self.name)

    def check_columns(self, columns) -> tuple[str, ...]:
        """Return `columns` as a tuple, refusing any name the table does not define."""
        columns = tuple(columns)
        unknown = [c for c in columns if c not in self.columns]
        if unknown:
            raise ValidationError(
                f"Unknown column(s) for {self.name}: {', '.join(unknown)}"
            )
        return columns


COMPANIES = Table(
    name="companies",
    primary_key="code",
    columns=("code", "name", "description"),
)

INVOICES = Table(
    name="invoices",
    primary_key="id",
    columns=("id", "comp_code", "amt", "paid", "add_date", "paid_date"),
)

TABLES = {t.name: t for t in (COMPANIES, INVOICES)}


def get_table(table) -> Table:
    """Resolve a table name (or Table) against the registry."""
    if isinstance(table, Table):
        table = table.name
    try:
        return TABLES[table]
    except KeyError:
        raise ValidationError(f"Unknown table: {table}") from None
