from enum import Enum
from typing import Optional


class Base45ErrorKind(Enum):
    INVALID_CHAR = "invalid_char"
    DANGLING = "dangling"
    OVERFLOW = "overflow"


class Base45Error(ValueError):
    """
    Raised when text cannot be decoded as Base45.

    `kind` tags the failure so callers can branch on it without parsing the
    message; `position` is the index into the decoded input where it was found.
    """

    kind: Base45ErrorKind

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.position = position


class InvalidCharError(Base45Error):
    """A character outside the 45-symbol alphabet."""

    kind = Base45ErrorKind.INVALID_CHAR

    def __init__(self, char: str, position: int) -> None:
        super().__init__(f"invalid base45 character {char!r} at position {position}", position)
        self.char = char


class DanglingError(Base45Error):
    """A single trailing character that cannot form a group."""

    kind = Base45ErrorKind.DANGLING

    def __init__(self, position: int) -> None:
        super().__init__(f"dangling character group at position {position}", position)


class GroupOverflowError(Base45Error):
    """A group whose value does not fit the byte group it stands for."""

    kind = Base45ErrorKind.OVERFLOW

    def __init__(self, value: int, limit: int, position: int) -> None:
        super().__init__(
            f"value overflow at position {position}: {value} > {limit}", position
        )
        self.value = value
        self.limit = limit


def describe(err: Optional[Base45Error]) -> str:
    """Short `kind@position` label used by the CLI `check` command."""
    if err is None:
        return "valid"
    return f"{err.kind.value}@{err.position}"
