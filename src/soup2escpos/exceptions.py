"""
Exceptions raised while encoding markup into ESC/POS commands.

Every failure is fatal to the run: producers raise, the encoder never catches,
and the first error propagates to the caller before any further bytes are
emitted.

Hierarchy:
    EncodeError (base)
    ├── UnknownTagError
    ├── MissingAttributeError
    ├── UnsupportedValueError
    ├── BarcodeLengthError
    ├── BarcodeCharsetError
    ├── ValueRangeError
    ├── ImageSizeError
    ├── ResourceAccessError
    └── MalformedInputError

Example:
    >>> from soup2escpos import encode
    >>> from soup2escpos.exceptions import EncodeError
    >>> try:
    ...     encode(b"<blink>!</blink>")
    ... except EncodeError as e:
    ...     print(e)
    Unknown tag: blink
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

__all__ = [
    "EncodeError",
    "UnknownTagError",
    "MissingAttributeError",
    "UnsupportedValueError",
    "BarcodeLengthError",
    "BarcodeCharsetError",
    "ValueRangeError",
    "ImageSizeError",
    "ResourceAccessError",
    "MalformedInputError",
]


class EncodeError(Exception):
    """
    Base exception for all encoding failures.

    Attributes:
        message: Human-readable description of the failure
        context: Additional structured details for logging and tests
    """

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class UnknownTagError(EncodeError):
    """Tag name has no entry in the tag registry."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"Unknown tag: {tag}", context={"tag": tag})
        self.tag = tag


class MissingAttributeError(EncodeError):
    """A required attribute is absent or empty."""

    def __init__(self, tag: str, attribute: str) -> None:
        super().__init__(
            f"Required attr '{attribute}' not found on <{tag}>",
            context={"tag": tag, "attribute": attribute},
        )
        self.tag = tag
        self.attribute = attribute


class UnsupportedValueError(EncodeError):
    """An attribute value is not one of the enumerated choices."""

    def __init__(self, attribute: str, value: str, allowed: Iterable[str]) -> None:
        allowed_list = sorted(allowed)
        super().__init__(
            f"Unsupported {attribute}: {value!r} (expected one of: {', '.join(allowed_list)})",
            context={"attribute": attribute, "value": value, "allowed": allowed_list},
        )
        self.attribute = attribute
        self.value = value
        self.allowed = allowed_list


class BarcodeLengthError(EncodeError):
    """Barcode payload is shorter or longer than the symbology allows."""

    def __init__(self, bound_name: str, bound: int, actual: int) -> None:
        super().__init__(
            f"Value {'under' if bound_name == 'minimum' else 'over'} "
            f"{bound_name} length of {bound} (got {actual})",
            context={"bound_name": bound_name, "bound": bound, "actual": actual},
        )
        self.bound_name = bound_name
        self.bound = bound
        self.actual = actual


class BarcodeCharsetError(EncodeError):
    """A barcode payload byte lies outside every valid range of the symbology."""

    def __init__(self, position: int, byte: int) -> None:
        super().__init__(
            f"Byte at pos {position} is out of valid range (0x{byte:02x})",
            context={"position": position, "byte": byte},
        )
        self.position = position
        self.byte = byte


class ValueRangeError(EncodeError):
    """A numeric attribute is not an integer inside its accepted bounds."""

    def __init__(self, attribute: str, value: str, minimum: int, maximum: int) -> None:
        super().__init__(
            f"{attribute.capitalize()} out of range: {value!r} (expected {minimum}-{maximum})",
            context={"attribute": attribute, "value": value, "minimum": minimum, "maximum": maximum},
        )
        self.attribute = attribute
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class ImageSizeError(EncodeError):
    """Image is wider or taller than the printer can accept."""

    def __init__(self, dimension: str, actual: int, maximum: int) -> None:
        super().__init__(
            f"Image {dimension} of {actual} exceeds max of {maximum}",
            context={"dimension": dimension, "actual": actual, "maximum": maximum},
        )
        self.dimension = dimension
        self.actual = actual
        self.maximum = maximum


class ResourceAccessError(EncodeError):
    """An image source cannot be opened or decoded."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(
            f"Error reading image {source!r}: {reason}",
            context={"source": source, "reason": reason},
        )
        self.source = source
        self.reason = reason


class MalformedInputError(EncodeError):
    """The markup is not well-formed or contains an unsupported construct."""

    def __init__(
        self, reason: str, *, line: Optional[int] = None, column: Optional[int] = None
    ) -> None:
        location = f" at line {line}, column {column}" if line is not None else ""
        super().__init__(
            f"Malformed input{location}: {reason}",
            context={"reason": reason, "line": line, "column": column},
        )
        self.reason = reason
        self.line = line
        self.column = column
