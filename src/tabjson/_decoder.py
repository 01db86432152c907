"""
Strict RFC 8259 tokenizer and recursive-descent parser.

Objects decode to tables with string keys in document order, arrays to
tables keyed ``1..n``.
"""

import string
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ._config import ParseConfig
from ._errors import JSONDecodeError
from ._errors import Position
from ._profile import ProfileContext
from ._values import Number
from ._values import Table

_DIGITS = frozenset("0123456789")
_HEX_DIGITS = frozenset(string.hexdigits)
_WHITESPACE = frozenset(" \t\n\r")
_STRUCTURAL = frozenset("{}[],:")
_CONTROL_LIMIT = 0x20

_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_LITERALS = {"true": True, "false": False, "null": None}


class TokenKind(Enum):
    STRING = "string"
    NUMBER = "number"
    LITERAL = "literal"
    PUNCTUATION = "punctuation"


@dataclass(frozen=True)
class JsonToken:
    """A lexeme with its span in the source document."""

    kind: TokenKind
    value: str
    start: Position
    end: Position


class JsonLexer:
    """
    Tokenizes JSON input for the parser.

    Character-by-character scanning of whitespace, strings, numbers,
    literals and structural tokens. String tokens keep their quotes and
    escapes; the parser resolves them.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def peek(self) -> str:
        """Returns current character without advancing."""
        return self.text[self.pos] if self.pos < self.length else "\0"

    def advance(self) -> str:
        """Returns current character and advances position."""
        char = self.peek()
        if self.pos < self.length:
            self.pos += 1
        return char

    def skip_whitespace(self) -> None:
        while self.pos < self.length and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

    def scan_string(self) -> JsonToken:
        """Scans a JSON string token including quotes."""
        with ProfileContext("scan_string"):
            start = self.pos
            self.advance()

            while self.pos < self.length:
                char = self.advance()
                if char == '"':
                    return JsonToken(
                        TokenKind.STRING,
                        self.text[start : self.pos],
                        start,
                        self.pos,
                    )
                if char == "\\":
                    if self.pos < self.length:
                        self.advance()
                elif ord(char) < _CONTROL_LIMIT:
                    raise JSONDecodeError(
                        "Invalid control character at",
                        self.text,
                        self.pos - 1,
                    )

            raise JSONDecodeError(
                "Unterminated string starting at", self.text, start
            )

    def _scan_digits(self) -> None:
        while self.peek() in _DIGITS:
            self.advance()

    def _scan_integer_part(self, start: Position) -> None:
        if self.peek() not in _DIGITS:
            raise JSONDecodeError("Invalid number", self.text, start)

        if self.advance() == "0" and self.peek() in _DIGITS:
            raise JSONDecodeError(
                "Leading zeros not allowed", self.text, start
            )
        self._scan_digits()

    def _scan_decimal_part(self, start: Position) -> None:
        if self.peek() == ".":
            self.advance()
            if self.peek() not in _DIGITS:
                raise JSONDecodeError(
                    "Invalid decimal number", self.text, start
                )
            self._scan_digits()

    def _scan_exponent_part(self, start: Position) -> None:
        if self.peek() in "eE":
            self.advance()
            if self.peek() in "+-":
                self.advance()
            if self.peek() not in _DIGITS:
                raise JSONDecodeError("Invalid exponent", self.text, start)
            self._scan_digits()

    def scan_number(self) -> JsonToken:
        """Scans a JSON number token."""
        with ProfileContext("scan_number"):
            start = self.pos
            if self.peek() == "-":
                self.advance()

            self._scan_integer_part(start)
            self._scan_decimal_part(start)
            self._scan_exponent_part(start)

            return JsonToken(
                TokenKind.NUMBER, self.text[start : self.pos], start, self.pos
            )

    def scan_literal(self) -> JsonToken:
        """Scans literal tokens: true, false, null."""
        start = self.pos
        for literal in _LITERALS:
            end = start + len(literal)
            if self.text[start:end] == literal:
                self.pos = end
                return JsonToken(TokenKind.LITERAL, literal, start, end)
        raise JSONDecodeError("Expecting value", self.text, start)

    def next_token(self) -> JsonToken | None:
        """Returns the next token or None if at end."""
        self.skip_whitespace()

        if self.pos >= self.length:
            return None

        char = self.peek()
        start = self.pos

        if char in _STRUCTURAL:
            self.advance()
            return JsonToken(TokenKind.PUNCTUATION, char, start, self.pos)
        if char == '"':
            return self.scan_string()
        if char in _DIGITS or char == "-":
            return self.scan_number()
        if char in "tfn":
            return self.scan_literal()
        raise JSONDecodeError("Expecting value", self.text, self.pos)


def _parse_hex4(inner: str, i: int, doc: str, pos: Position) -> int:
    digits = inner[i : i + 4]
    if len(digits) != 4 or not _HEX_DIGITS.issuperset(digits):  # noqa: PLR2004
        raise JSONDecodeError("Invalid \\uXXXX escape", doc, pos)
    return int(digits, 16)


def _decode_escape(
    inner: str, i: int, doc: str, offset: Position
) -> tuple[str, int]:
    """Resolves the escape at ``inner[i]``; returns the text and next index."""
    next_char = inner[i + 1]
    if next_char in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[next_char], i + 2
    if next_char != "u":
        raise JSONDecodeError("Invalid \\escape", doc, offset + i)

    code = _parse_hex4(inner, i + 2, doc, offset + i)
    if 0xD800 <= code <= 0xDBFF and inner[i + 6 : i + 8] == "\\u":  # noqa: PLR2004
        low = _parse_hex4(inner, i + 8, doc, offset + i + 6)
        if 0xDC00 <= low <= 0xDFFF:  # noqa: PLR2004
            pair = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
            return chr(pair), i + 12
    return chr(code), i + 6


def _decode_string(raw: str, doc: str, start: Position) -> str:
    """Strips the quotes from a string token and resolves its escapes."""
    with ProfileContext("decode_string", len(raw)):
        inner = raw[1:-1]
        if "\\" not in inner:
            return inner

        offset = start + 1
        chunks = []
        i = 0
        while True:
            j = inner.find("\\", i)
            if j < 0:
                chunks.append(inner[i:])
                break
            chunks.append(inner[i:j])
            char, i = _decode_escape(inner, j, doc, offset)
            chunks.append(char)
        return "".join(chunks)


def _decode_number(token: JsonToken, doc: str, config: ParseConfig) -> Any:
    literal = token.value
    if "." in literal or "e" in literal or "E" in literal:
        if config.parse_float:
            return config.parse_float(literal)
        if config.use_number:
            return Number(literal)
        return float(literal)

    if config.parse_int:
        return config.parse_int(literal)
    if config.use_number:
        return Number(literal)
    try:
        return int(literal)
    except ValueError as e:
        # Past the interpreter's int string conversion limit
        raise JSONDecodeError("Number too large", doc, token.start) from e


class JsonParser:
    """
    Recursive-descent parser over the lexer's token stream.

    Tracks container depth so adversarial nesting fails with a
    ``JSONDecodeError`` rather than exhausting the interpreter stack.
    """

    def __init__(self, lexer: JsonLexer, config: ParseConfig):
        self.lexer = lexer
        self.config = config
        self.current_token: JsonToken | None = None
        self.depth = 0
        self._key_cache: dict[str, str] = {}

    def advance_token(self) -> JsonToken | None:
        """Advances to next token and returns it."""
        self.current_token = self.lexer.next_token()
        return self.current_token

    def _error_pos(self) -> Position:
        if self.current_token:
            return self.current_token.start
        return self.lexer.pos

    def expect_token(self, expected_value: str) -> JsonToken:
        """Expects a specific token value and advances."""
        token = self.current_token
        if not token or token.value != expected_value:
            raise JSONDecodeError(
                f"Expecting '{expected_value}' delimiter",
                self.lexer.text,
                self._error_pos(),
            )
        self.advance_token()
        return token

    def parse_value(self) -> Any:
        """Parses any JSON value based on current token."""
        token = self.current_token
        if not token:
            raise JSONDecodeError(
                "Expecting value", self.lexer.text, self.lexer.pos
            )

        if token.kind is TokenKind.LITERAL:
            self.advance_token()
            return _LITERALS[token.value]
        if token.kind is TokenKind.STRING:
            self.advance_token()
            return _decode_string(token.value, self.lexer.text, token.start)
        if token.kind is TokenKind.NUMBER:
            self.advance_token()
            return _decode_number(token, self.lexer.text, self.config)
        if token.value == "{":
            return self.parse_object()
        if token.value == "[":
            return self.parse_array()
        raise JSONDecodeError("Expecting value", self.lexer.text, token.start)

    def _enter_container(self, token: JsonToken) -> None:
        if self.depth >= self.config.max_depth:
            raise JSONDecodeError(
                "Maximum nesting depth exceeded",
                self.lexer.text,
                token.start,
            )
        self.depth += 1

    def _parse_object_key(self) -> str:
        """Parses an object key, reusing one string per distinct key."""
        token = self.current_token
        if not token or token.kind is not TokenKind.STRING:
            raise JSONDecodeError(
                "Expecting property name enclosed in double quotes",
                self.lexer.text,
                self._error_pos(),
            )
        self.advance_token()

        key = self._key_cache.get(token.value)
        if key is None:
            key = _decode_string(token.value, self.lexer.text, token.start)
            self._key_cache[token.value] = key
        return key

    def _continue_container(self, close: str, name: str) -> bool:
        """Consumes ``,`` or the closer; True when more members follow."""
        token = self.current_token
        if not token:
            raise JSONDecodeError(
                "Expecting ',' delimiter", self.lexer.text, self.lexer.pos
            )

        if token.value == close:
            self.advance_token()
            return False
        if token.value == ",":
            self.advance_token()
            if self.current_token and self.current_token.value == close:
                raise JSONDecodeError(
                    f"Illegal trailing comma before end of {name}",
                    self.lexer.text,
                    token.start,
                )
            return True
        raise JSONDecodeError(
            "Expecting ',' delimiter", self.lexer.text, token.start
        )

    def parse_object(self) -> Any:
        with ProfileContext("parse_object"):
            self._enter_container(self.expect_token("{"))

            pairs: list[tuple[str, Any]] = []
            if self.current_token and self.current_token.value == "}":
                self.advance_token()
            else:
                while True:
                    key = self._parse_object_key()
                    self.expect_token(":")
                    pairs.append((key, self.parse_value()))
                    if not self._continue_container("}", "object"):
                        break

            self.depth -= 1
            if self.config.object_pairs_hook:
                return self.config.object_pairs_hook(pairs)
            return Table(pairs)

    def parse_array(self) -> Table:
        with ProfileContext("parse_array"):
            self._enter_container(self.expect_token("["))

            values: list[Any] = []
            if self.current_token and self.current_token.value == "]":
                self.advance_token()
            else:
                while True:
                    values.append(self.parse_value())
                    if not self._continue_container("]", "array"):
                        break

            self.depth -= 1
            return Table.from_sequence(values)


def decode_document(s: str, config: ParseConfig) -> Any:
    """Parses a complete document, rejecting a BOM and trailing data."""
    with ProfileContext("decode_document", len(s)):
        if s.startswith("\ufeff"):
            raise JSONDecodeError(
                "JSON input should not contain BOM (Byte Order Mark)", s, 0
            )

        lexer = JsonLexer(s)
        parser = JsonParser(lexer, config)
        parser.advance_token()

        result = parser.parse_value()

        if parser.current_token:
            raise JSONDecodeError("Extra data", s, parser.current_token.start)

        return result
