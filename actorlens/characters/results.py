"""
Error kinds and result values for the character tools.

Each boundary (argument validation, the bridge query, record decoding)
returns a ``Success`` or a ``Failure`` instead of raising, so callers can
branch on ``result.ok`` and ``failure.kind`` without inspecting messages.
``unwrap()`` turns a failure back into a raised exception for surfaces that
expect one (the tool dispatcher, the CLI).
"""

from dataclasses import dataclass
from typing import ClassVar, Generic, NoReturn, TypeVar, Union

T = TypeVar("T")


class CharacterToolError(Exception):
    """Base class for character tool failures."""

    kind: ClassVar[str] = "error"

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class CharacterValidationError(CharacterToolError, ValueError):
    """Request arguments were missing or malformed. Raised before any query."""

    kind = "validation"


class CharacterLookupError(CharacterToolError, LookupError):
    """The bridge query failed or returned no usable record."""

    kind = "lookup"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    ok: ClassVar[bool] = True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: CharacterToolError

    ok: ClassVar[bool] = False

    @property
    def kind(self) -> str:
        return self.error.kind

    @property
    def message(self) -> str:
        return str(self.error)

    def unwrap(self) -> NoReturn:
        raise self.error from self.error.cause


Result = Union[Success[T], Failure]


def describe_cause(error: BaseException | None) -> str:
    """Human-readable message of an underlying error."""
    if error is None:
        return "Unknown error"
    return str(error) or type(error).__name__
