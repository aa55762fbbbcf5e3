"""Storage size estimates for SQL Server column types."""

from __future__ import annotations

from ddl_cli.shared.exceptions import InvalidPrecision, UnknownDataType

# Fixed-point precision bands: (lowest precision, highest precision, bytes).
_DECIMAL_BANDS: tuple[tuple[int, int, int], ...] = (
    (1, 9, 5),
    (10, 19, 9),
    (20, 28, 13),
    (29, 38, 17),
)

_FLOAT_BANDS: tuple[tuple[int, int, int], ...] = (
    (1, 24, 4),
    (25, 53, 8),
)

_FIXED_SIZES: dict[str, int] = {
    "date": 3,
    "int": 4,
    "smalldatetime": 4,
    "bigint": 8,
    "datetime": 8,
    "smallint": 2,
    "tinyint": 1,
    "bit": 1,
    "uniqueidentifier": 16,
}

_VARIABLE_TYPES = {"varchar", "char", "binary"}
_DOUBLE_BYTE_TYPES = {"nvarchar"}


def bytes_for(data_type: str, size: int, *, column: str | None = None) -> int:
    """Return the maximum number of bytes a column of ``data_type`` occupies.

    ``size`` is the declared size or precision (0 when the DDL gives none).
    The lookup is case-insensitive on ``data_type``.

    Raises:
        InvalidPrecision: decimal/numeric/float precision outside every band.
        UnknownDataType: the type has no size rule.
    """

    key = data_type.lower()
    if key in ("numeric", "decimal"):
        return _banded(_DECIMAL_BANDS, "Decimal or Numeric", data_type, size, column)
    if key == "float":
        return _banded(_FLOAT_BANDS, "Float", data_type, size, column)
    if key in _FIXED_SIZES:
        return _FIXED_SIZES[key]
    if key in _VARIABLE_TYPES:
        return size
    if key in _DOUBLE_BYTE_TYPES:
        return size * 2
    raise UnknownDataType(
        f"Unknown Data Type [{data_type}] for Column [{column}]",
        data_type=data_type,
        size=size,
        column=column,
    )


def _banded(
    bands: tuple[tuple[int, int, int], ...],
    label: str,
    data_type: str,
    size: int,
    column: str | None,
) -> int:
    for low, high, width in bands:
        if low <= size <= high:
            return width
    raise InvalidPrecision(
        f"Invalid Precision for {label}! Data Type [{data_type}] for Column [{column}] Size [{size}]",
        data_type=data_type,
        size=size,
        column=column,
    )
