"""TIFF field types and their per-element byte widths."""

from __future__ import annotations

from enum import IntEnum

from tiff_dither.core.errors import UnknownFieldType


class FieldType(IntEnum):
    BYTE = 1
    ASCII = 2
    SHORT = 3
    LONG = 4
    RATIONAL = 5
    SBYTE = 6
    UNDEFINED = 7
    SSHORT = 8
    SLONG = 9
    SRATIONAL = 10
    FLOAT = 11
    DOUBLE = 12


FIELD_WIDTHS: dict[FieldType, int] = {
    FieldType.BYTE: 1,
    FieldType.ASCII: 1,
    FieldType.SHORT: 2,
    FieldType.LONG: 4,
    FieldType.RATIONAL: 8,  # two LONGs
    FieldType.SBYTE: 1,
    FieldType.UNDEFINED: 1,
    FieldType.SSHORT: 2,
    FieldType.SLONG: 4,
    FieldType.SRATIONAL: 8,  # two SLONGs
    FieldType.FLOAT: 4,
    FieldType.DOUBLE: 8,
}


def element_width(field_type: int) -> int:
    """Bytes per element for a field-type code.

    Raises:
        UnknownFieldType: the code is not one of the twelve TIFF 6.0 types.
    """
    try:
        return FIELD_WIDTHS[FieldType(field_type)]
    except ValueError:
        raise UnknownFieldType(field_type) from None


def field_type_name(field_type: int) -> str:
    try:
        return FieldType(field_type).name
    except ValueError:
        return f"?{field_type}"
