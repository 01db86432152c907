"""Error taxonomy shared by the encoder and decoder."""

from typing import TypeAlias

Position: TypeAlias = int


class EncodeError(ValueError):
    """
    Base class for values that cannot be rendered as JSON text.

    Encoding is all-or-nothing: the first error aborts the whole call and
    no partial output is produced.
    """


class InvalidKeyTypeError(EncodeError):
    """Raised when a table's key set is neither an array nor an object."""

    def __init__(self, msg: str = "mixed or invalid key types") -> None:
        super().__init__(msg)


class SparseArrayError(InvalidKeyTypeError):
    """Raised for integer key sets with gaps under the "error" policy."""

    def __init__(self, border: int, max_index: int) -> None:
        self.border = border
        self.max_index = max_index
        super().__init__(
            "mixed or invalid key types: sparse array "
            f"(index {border + 1} missing, largest index {max_index})"
        )


class CyclicReferenceError(EncodeError):
    """Raised when a table is reachable from itself."""

    def __init__(self) -> None:
        super().__init__("cannot encode recursively nested tables to JSON")


class UnsupportedNumberError(EncodeError):
    """Raised for non-finite numbers and integers too long to print."""

    def __init__(self, value: object, msg: str | None = None) -> None:
        self.value = value
        if msg is None:
            msg = (
                "Out of range float values are not JSON compliant: "
                f"{value!r}"
            )
        super().__init__(msg)


class NestingDepthError(EncodeError):
    """Raised when containers nest deeper than the configured limit."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Maximum nesting depth exceeded ({max_depth})")


class JSONDecodeError(ValueError):
    """
    Handles JSON parsing failures with position and context information.

    Error state containing position, line/column numbers, and surrounding
    context to help users identify and fix JSON syntax issues.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")

    def __reduce__(self) -> tuple[type, tuple[str, str, Position]]:
        return self.__class__, (self.msg, self.doc, self.pos)
