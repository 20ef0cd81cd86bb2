"""Relative position descriptor for project columns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from ghcolumns.errors import ValidationError

PositionKind = Literal["first", "last", "after"]

_AFTER_PREFIX = "after:"


@dataclass(slots=True, frozen=True)
class Position:
    """
    Where a column sits (or should sit) relative to its siblings.

    Exactly one of:
        - first
        - last
        - after:<anchor>   (anchor is the predecessor's identity)

    This is both what PositionLocator reports and what the GitHub move
    endpoint accepts. There is no integer index.
    """

    kind: PositionKind
    anchor: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind not in ("first", "last", "after"):
            raise ValidationError(f"Unknown position kind: {self.kind!r}")
        if self.kind == "after":
            if not isinstance(self.anchor, str) or not self.anchor.strip():
                raise ValidationError("after position requires a non-empty anchor")
            if any(ch.isspace() for ch in self.anchor):
                raise ValidationError(
                    "position anchor must not contain whitespace",
                    details={"anchor": self.anchor},
                )
        elif self.anchor is not None:
            raise ValidationError(f"{self.kind} position does not take an anchor")

    @classmethod
    def first(cls) -> Position:
        return cls("first")

    @classmethod
    def last(cls) -> Position:
        return cls("last")

    @classmethod
    def after(cls, anchor: str) -> Position:
        return cls("after", anchor)

    @classmethod
    def parse(cls, value: str) -> Position:
        """
        Parse the `first | last | after:<id>` grammar.

        Raises:
            ValidationError: for anything else.
        """
        if not isinstance(value, str):
            raise ValidationError("position must be a string", details={"position": value})

        if value == "first":
            return cls.first()
        if value == "last":
            return cls.last()
        anchor = value[len(_AFTER_PREFIX):]
        if value.startswith(_AFTER_PREFIX) and anchor and not any(ch.isspace() for ch in anchor):
            return cls.after(anchor)

        raise ValidationError(
            "position can only be one of 'first', 'last', or 'after:<column_id>'",
            details={"position": value},
        )

    @property
    def is_first(self) -> bool:
        return self.kind == "first"

    @property
    def is_last(self) -> bool:
        return self.kind == "last"

    @property
    def is_after(self) -> bool:
        return self.kind == "after"

    def with_anchor(self, anchor: str) -> Position:
        """Return a copy with the anchor replaced (after positions only)."""
        if not self.is_after:
            return self
        return Position.after(anchor)

    def to_wire(self) -> str:
        if self.is_after:
            return f"{_AFTER_PREFIX}{self.anchor}"
        return self.kind

    def __str__(self) -> str:
        return self.to_wire()
