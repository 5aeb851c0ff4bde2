"""Reader for the libconfig configuration format.

Groups ``{ ... }`` become dicts, lists ``( ... )`` become Python lists and
arrays ``[ ... ]`` become tuples, so a list can be told apart from an array.
Scalars become ``int``, ``float``, ``bool`` or ``str``.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

__all__ = ["ConfigParseError", "load", "loads"]


class ConfigParseError(ValueError):
    """Raised when a configuration text is malformed."""

    def __init__(self, error: str, line: int, filename: str | None = None) -> None:
        self.error = error
        self.line = line
        self.filename = filename
        where = f"{filename}:{line}" if filename else f"line {line}"
        super().__init__(f"{where}: {error}")


_SIGN = r"[-+]?"
_TOKEN_SPEC = (
    ("space", r"[ \t\r\n\f]+"),
    ("comment", r"\#[^\n]*|//[^\n]*|/\*.*?\*/"),
    (
        "float",
        _SIGN + r"(?:(?:\d+\.\d*|\.\d+)(?:[eE][-+]?\d+)?|\d+[eE][-+]?\d+)",
    ),
    ("hex", r"0[xX][0-9A-Fa-f]+L{0,2}"),
    ("int", _SIGN + r"\d+L{0,2}"),
    ("string", r'"(?:[^"\\]|\\.)*"'),
    ("name", r"[A-Za-z*][-A-Za-z0-9_*]*"),
    ("punct", r"[=:;,{}\[\]()]"),
)
_TOKEN_RE = re.compile(
    "|".join(f"(?P<{kind}>{pattern})" for kind, pattern in _TOKEN_SPEC),
    re.DOTALL,
)
_ESCAPE_RE = re.compile(r"\\(x[0-9A-Fa-f]{2}|.)", re.DOTALL)
_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "f": "\f", "\\": "\\", '"': '"'}


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    line: int


def _tokenize(text: str) -> Iterator[_Token]:
    pos = 0
    line = 1
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise ConfigParseError(f"unexpected character {text[pos]!r}", line)
        kind = match.lastgroup or ""
        value = match.group()
        if kind == "name" and value.lower() in ("true", "false"):
            kind = "bool"
        if kind not in ("space", "comment"):
            yield _Token(kind, value, line)
        line += value.count("\n")
        pos = match.end()


def _unescape(body: str) -> str:
    def replace(match: re.Match[str]) -> str:
        escape = match.group(1)
        if escape.startswith("x") and len(escape) == 3:
            return chr(int(escape[1:], 16))
        return _ESCAPES.get(escape, escape)

    return _ESCAPE_RE.sub(replace, body)


class _Parser:
    def __init__(self, tokens: list[_Token], last_line: int) -> None:
        self._tokens = tokens
        self._pos = 0
        self._last_line = last_line

    def _peek(self) -> _Token | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _error(self, message: str, token: _Token | None = None) -> ConfigParseError:
        if token is None:
            token = self._peek()
        line = token.line if token is not None else self._last_line
        return ConfigParseError(message, line)

    def _advance(self) -> _Token:
        token = self._peek()
        if token is None:
            raise self._error("unexpected end of input")
        self._pos += 1
        return token

    def _accept(self, *texts: str) -> _Token | None:
        token = self._peek()
        if token is not None and token.kind == "punct" and token.text in texts:
            self._pos += 1
            return token
        return None

    def document(self) -> dict[str, Any]:
        return self._settings(closing=None)

    def _settings(self, closing: str | None) -> dict[str, Any]:
        result: dict[str, Any] = {}
        while True:
            token = self._peek()
            if token is None:
                if closing is None:
                    return result
                raise self._error(f"expected {closing!r} before end of input")
            if closing is not None and token.kind == "punct" and token.text == closing:
                self._pos += 1
                return result
            if token.kind != "name":
                raise self._error(f"expected a setting name, found {token.text!r}", token)
            self._pos += 1
            if self._accept("=", ":") is None:
                raise self._error(f"expected '=' or ':' after {token.text!r}")
            value = self._value()
            self._accept(";", ",")
            if token.text in result:
                raise self._error(f"duplicate setting name {token.text!r}", token)
            result[token.text] = value

    def _value(self) -> Any:
        token = self._advance()
        if token.kind == "punct":
            if token.text == "{":
                return self._settings(closing="}")
            if token.text == "[":
                return tuple(self._sequence("]", scalars_only=True))
            if token.text == "(":
                return self._sequence(")", scalars_only=False)
        return self._scalar(token)

    def _sequence(self, closing: str, scalars_only: bool) -> list[Any]:
        items: list[Any] = []
        if self._accept(closing) is not None:
            return items
        while True:
            if scalars_only:
                token = self._advance()
                item = self._scalar(token)
                if items and type(item) is not type(items[0]):
                    raise self._error("mismatched element type in array", token)
            else:
                item = self._value()
            items.append(item)
            if self._accept(closing) is not None:
                return items
            if self._accept(",") is None:
                raise self._error(f"expected ',' or {closing!r}")

    def _scalar(self, token: _Token) -> Any:
        if token.kind == "int":
            return int(token.text.rstrip("L"))
        if token.kind == "hex":
            return int(token.text.rstrip("L"), 16)
        if token.kind == "float":
            return float(token.text)
        if token.kind == "bool":
            return token.text.lower() == "true"
        if token.kind == "string":
            parts = [_unescape(token.text[1:-1])]
            while (following := self._peek()) is not None and following.kind == "string":
                self._pos += 1
                parts.append(_unescape(following.text[1:-1]))
            return "".join(parts)
        raise self._error(f"expected a value, found {token.text!r}", token)


def loads(text: str) -> dict[str, Any]:
    """Parse configuration text into a dict of settings.

    Raises ConfigParseError on malformed input.
    """
    tokens = list(_tokenize(text))
    return _Parser(tokens, text.count("\n") + 1).document()


def load(path: str | os.PathLike[str]) -> dict[str, Any]:
    """Read and parse the configuration file at ``path``.

    Raises OSError if the file cannot be read and ConfigParseError if it is
    malformed.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        return loads(text)
    except ConfigParseError as exc:
        raise ConfigParseError(exc.error, exc.line, os.fspath(path)) from None