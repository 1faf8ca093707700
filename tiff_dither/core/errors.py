"""Decode errors.

Every failure while decoding a TIFF is fatal for that file, so these are
raised straight through to the caller. ``code`` is the machine-readable
name the CLI puts in its JSON error output.
"""

from __future__ import annotations


class TiffDecodeError(ValueError):
    """Base class for all decode failures."""

    code = "DECODE_ERROR"


class NotATiff(TiffDecodeError):
    code = "NOT_A_TIFF"

    def __init__(self, prefix: bytes) -> None:
        self.prefix = bytes(prefix)
        super().__init__(f"Not a TIFF file (header {self.prefix.hex(' ') or 'empty'})")


class UnknownFieldType(TiffDecodeError):
    code = "UNKNOWN_FIELD_TYPE"

    def __init__(self, field_type: int, tag_id: int | None = None) -> None:
        self.field_type = field_type
        self.tag_id = tag_id
        where = f" for tag {tag_id}" if tag_id is not None else ""
        super().__init__(f"Unknown field type {field_type}{where}")


class MissingRequiredTag(TiffDecodeError):
    code = "MISSING_REQUIRED_TAG"

    def __init__(self, tag_ids: list[int]) -> None:
        self.tag_ids = list(tag_ids)
        names = ", ".join(str(t) for t in self.tag_ids)
        super().__init__(f"Missing required tag(s): {names}")


class TruncatedInput(TiffDecodeError):
    code = "TRUNCATED_INPUT"

    def __init__(self, offset: int, needed: int, available: int, what: str = "data") -> None:
        self.offset = offset
        self.needed = needed
        self.available = available
        super().__init__(
            f"Truncated input reading {what}: need {needed} bytes at offset "
            f"{offset}, buffer has {available}"
        )


class UnsupportedImage(TiffDecodeError):
    """Valid TIFF, but outside what the pixel loader handles."""

    code = "UNSUPPORTED_IMAGE"


def require(data: bytes, offset: int, length: int, what: str = "data") -> None:
    """Raise TruncatedInput unless ``data[offset:offset + length]`` is in range."""
    if offset < 0 or offset + length > len(data):
        raise TruncatedInput(offset, length, len(data), what)
