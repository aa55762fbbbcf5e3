from __future__ import annotations

from pathlib import Path

from ddl_cli.ddl_size.filename import decompose
from ddl_cli.ddl_size.scanner import read_lines, scan, table_statement_pattern
from ddl_cli.ddl_size.sizing import bytes_for
from ddl_cli.ddl_size.types import ColumnDef
from ddl_cli.shared.exceptions import UnknownDataType

CUSTOMER = decompose("DB_dbo_Customer.txt")

CUSTOMER_DDL = """\
SET ANSI_NULLS ON
GO
CREATE TABLE [dbo].[Customer](
\t[CustomerId] [int] NOT NULL,
\t[Name] [nvarchar](50) NULL,
 CONSTRAINT [PK_Customer] PRIMARY KEY CLUSTERED
(
\t[CustomerId] ASC
)) ON [PRIMARY]
GO
"""


def test_collects_columns_of_matching_table() -> None:
    record = scan(CUSTOMER, CUSTOMER_DDL.splitlines())
    assert record.columns == (
        ColumnDef(name="CustomerId", data_type="int", size=0),
        ColumnDef(name="Name", data_type="nvarchar", size=50),
    )
    assert record.record_size_bytes == bytes_for("int", 0) + bytes_for("nvarchar", 50) == 104
    assert record.is_view is False
    assert record.warnings == ()


def test_two_columns_then_closing_paren() -> None:
    lines = [
        "CREATE TABLE [dbo].[Customer] (",
        "    [CustomerId] [int] NOT NULL,",
        "    [Price] [decimal](18, 2) NULL",
        ")",
    ]
    record = scan(CUSTOMER, lines)
    assert record.column_count == 2
    assert record.record_size_bytes == 4 + 9


def test_ignores_other_tables_in_the_same_file() -> None:
    lines = [
        "CREATE TABLE [dbo].[CustomerHistory](",
        "\t[HistoryId] [bigint] NOT NULL,",
        ")",
        "CREATE TABLE [sales].[Customer](",
        "\t[Region] [varchar](10) NULL,",
        ")",
        "CREATE TABLE [dbo].[Customer](",
        "\t[CustomerId] [int] NOT NULL,",
        ")",
    ]
    record = scan(CUSTOMER, lines)
    assert [column.name for column in record.columns] == ["CustomerId"]
    assert record.record_size_bytes == 4


def test_statement_match_is_case_insensitive() -> None:
    lines = ["create table [DBO].[customer](", "\t[CustomerId] [int] NOT NULL,", ")"]
    record = scan(CUSTOMER, lines)
    assert record.column_count == 1


def test_collection_stops_at_first_non_column_line() -> None:
    lines = [
        "CREATE TABLE [dbo].[Customer](",
        "\t[CustomerId] [int] NOT NULL,",
        "",
        "\t[Name] [varchar](50) NULL,",
        ")",
    ]
    record = scan(CUSTOMER, lines)
    assert [column.name for column in record.columns] == ["CustomerId"]


def test_view_is_flagged_without_warning() -> None:
    identity = decompose("DB_dbo_CustomerView.txt")
    lines = [
        "CREATE VIEW [dbo].[CustomerView] AS SELECT",
        "\t[CustomerId] [int]",
        "FROM [dbo].[Customer]",
    ]
    record = scan(identity, lines)
    assert record.is_view is True
    assert record.columns == ()
    assert record.record_size_bytes == 0
    assert record.warnings == ()


def test_table_named_like_view_is_not_a_view() -> None:
    identity = decompose("DB_dbo_Customer_View.txt")
    lines = ["CREATE TABLE [dbo].[Customer_View](", "\t[Id] [int] NOT NULL,", ")"]
    record = scan(identity, lines)
    assert record.is_view is False
    assert record.column_count == 1


def test_missing_statement_is_reported() -> None:
    record = scan(CUSTOMER, ["CREATE TABLE [dbo].[Orders](", "\t[OrderId] [int] NOT NULL,", ")"])
    assert record.columns == ()
    assert record.record_size_bytes == 0
    assert record.statement_found is False
    assert any("No CREATE TABLE statement" in warning for warning in record.warnings)


def test_unresolved_schema_skips_body() -> None:
    identity = decompose("DB_sales_Customer.txt")

    def exploding_lines():
        raise AssertionError("body must not be read")
        yield ""  # pragma: no cover

    record = scan(identity, exploding_lines())
    assert record.record_size_bytes == 0
    assert record.columns == ()
    assert any("Schema was not found" in warning for warning in record.warnings)


def test_unknown_type_marks_size_unreliable() -> None:
    lines = [
        "CREATE TABLE [dbo].[Customer](",
        "\t[CustomerId] [int] NOT NULL,",
        "\t[Location] [geography] NULL,",
        ")",
    ]
    record = scan(CUSTOMER, lines)
    assert record.column_count == 2
    assert record.record_size_bytes is None
    assert record.size_is_reliable is False
    assert isinstance(record.size_error, UnknownDataType)
    assert record.size_error.column == "Location"
    assert any(
        warning.startswith("Record size for [DB_dbo_Customer.txt] is unreliable")
        for warning in record.warnings
    )


def test_size_warning_is_kept_on_record() -> None:
    lines = ["CREATE TABLE [dbo].[Customer](", "\t[Blob] [varchar](MAX) NULL,", ")"]
    record = scan(CUSTOMER, lines)
    assert record.record_size_bytes == 1
    assert any("Blob" in warning for warning in record.warnings)


def test_scan_is_idempotent() -> None:
    first = scan(CUSTOMER, CUSTOMER_DDL.splitlines())
    second = scan(decompose("DB_dbo_Customer.txt"), CUSTOMER_DDL.splitlines())
    assert first == second


def test_pattern_requires_opening_parenthesis() -> None:
    pattern = table_statement_pattern("dbo", "Customer")
    assert pattern.match("CREATE TABLE [dbo].[Customer](")
    assert pattern.match("CREATE TABLE [dbo].[Customer] (")
    assert not pattern.match("CREATE TABLE [dbo].[Customer]")
    assert not pattern.match("CREATE TABLE [dbo].[Customers](")


def test_read_lines_strips_terminators(tmp_path: Path) -> None:
    path = tmp_path / "DB_dbo_Customer.txt"
    path.write_bytes(b"CREATE TABLE [dbo].[Customer](\r\n\t[Id] [int] NOT NULL,\r\n)\r\n")
    assert list(read_lines(path)) == ["CREATE TABLE [dbo].[Customer](", "\t[Id] [int] NOT NULL,", ")"]
    record = scan(decompose(path.name), read_lines(path))
    assert record.record_size_bytes == 4
