"""Print configuration models for writable-table."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from .exceptions import ValidationError

DEFAULT_PADDING = 4
DEFAULT_PAD_CHAR = " "


class Justification(Enum):
    """
    Horizontal alignment of rendered cells.

    The member values double as the wire codes used by the binary codec.
    """

    RIGHT = 0  # pad characters precede the text
    LEFT = 1  # pad characters follow the text

    def toggled(self) -> "Justification":
        """Return the opposite justification."""
        return Justification.LEFT if self is Justification.RIGHT else Justification.RIGHT

    @classmethod
    def from_code(cls, code: int) -> "Justification":
        """Look up a justification by its wire code."""
        for member in cls:
            if member.value == code:
                return member
        raise ValidationError("justification", code, "Unknown justification code")

    @classmethod
    def from_name(cls, name: str) -> "Justification":
        """Look up a justification by name (case-insensitive)."""
        try:
            return cls[name.strip().upper()]
        except (KeyError, AttributeError):
            raise ValidationError(
                "justification", name, "Must be 'left' or 'right'"
            ) from None


@dataclass(frozen=True)
class PrintConfig:
    """
    Console rendering options for a table.

    PrintConfig is immutable; every change produces a new value so copies
    of a table never share configuration by accident.

    Attributes:
        justification: RIGHT (default) or LEFT
        padding: Extra characters reserved per column, must be >= 1
        pad_char: Single character used to fill cells
        show_headers: Whether a header line is printed first
    """

    justification: Justification = Justification.RIGHT
    padding: int = DEFAULT_PADDING
    pad_char: str = DEFAULT_PAD_CHAR
    show_headers: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.justification, Justification):
            raise ValidationError(
                "justification", self.justification, "Must be a Justification member"
            )
        if isinstance(self.padding, bool) or not isinstance(self.padding, int):
            raise ValidationError("padding", self.padding, "Must be an integer")
        if self.padding < 1:
            raise ValidationError("padding", self.padding, "Must be at least 1")
        validate_pad_char(self.pad_char)
        if not isinstance(self.show_headers, bool):
            raise ValidationError("show_headers", self.show_headers, "Must be a boolean")

    def with_padding(self, padding: int) -> "PrintConfig":
        """Return a copy with a different padding."""
        return replace(self, padding=padding)

    def with_justification(self, justification: Justification) -> "PrintConfig":
        """Return a copy with a different justification."""
        return replace(self, justification=justification)

    def toggled(self) -> "PrintConfig":
        """Return a copy with LEFT/RIGHT flipped."""
        return replace(self, justification=self.justification.toggled())

    def with_pad_char(self, pad_char: str) -> "PrintConfig":
        """Return a copy with a different pad character."""
        return replace(self, pad_char=pad_char)

    def with_show_headers(self, show_headers: bool) -> "PrintConfig":
        """Return a copy with header printing switched on or off."""
        return replace(self, show_headers=show_headers)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary (YAML/JSON friendly)."""
        return {
            "justification": self.justification.name.lower(),
            "padding": self.padding,
            "pad_char": self.pad_char,
            "show_headers": self.show_headers,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PrintConfig":
        """
        Deserialize from a dictionary.

        Missing keys keep their defaults. Unknown keys are rejected so a
        typo in a config file does not go unnoticed.
        """
        unknown = set(data) - {"justification", "padding", "pad_char", "show_headers"}
        if unknown:
            raise ValidationError(
                "config", min(unknown, key=str), "Unknown print configuration key"
            )
        kwargs: dict[str, Any] = {}
        if "justification" in data:
            value = data["justification"]
            kwargs["justification"] = (
                value if isinstance(value, Justification) else Justification.from_name(value)
            )
        if "padding" in data:
            kwargs["padding"] = data["padding"]
        if "pad_char" in data:
            kwargs["pad_char"] = data["pad_char"]
        if "show_headers" in data:
            kwargs["show_headers"] = data["show_headers"]
        return cls(**kwargs)


def validate_pad_char(pad_char: Any) -> None:
    """
    Validate a pad character.

    The binary form stores the pad character as one UTF-16 code unit, so
    characters outside the Basic Multilingual Plane are rejected.

    Raises:
        ValidationError: If pad_char is not a single BMP character
    """
    if not isinstance(pad_char, str) or len(pad_char) != 1:
        raise ValidationError("pad_char", pad_char, "Must be exactly one character")
    if ord(pad_char) > 0xFFFF:
        raise ValidationError(
            "pad_char", pad_char, "Must fit in a single UTF-16 code unit"
        )
    if 0xD800 <= ord(pad_char) <= 0xDFFF:
        raise ValidationError("pad_char", pad_char, "Surrogate code points are not allowed")
