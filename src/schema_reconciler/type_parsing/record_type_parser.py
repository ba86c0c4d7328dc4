"""Structural parser for TypeScript-style interface and type alias declarations."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from .record_models import FieldDefinition, RecordTypeDefinition

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<newline>\r\n|\n|\r)
  | (?P<space>[^\S\r\n]+)
  | (?P<line_comment>//[^\r\n]*)
  | (?P<block_comment>/\*.*?\*/)
  | (?P<string>'(?:\\.|[^'\\\r\n])*'|"(?:\\.|[^"\\\r\n])*")
  | (?P<template>`(?:\\.|[^`\\])*`)
  | (?P<identifier>(?:[^\W\d]|\$)[\w$]*)
  | (?P<number>\d[\d_]*(?:\.\d+)?(?:[eE][+-]?\d+)?)
  | (?P<arrow>=>)
  | (?P<spread>\.\.\.)
  | (?P<other>.)
    """,
    re.VERBOSE | re.DOTALL,
)

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {value: key for key, value in _OPENERS.items()}
_MEMBER_OPENERS = frozenset({"(", "[", "{", "<"})
_MEMBER_CLOSERS = frozenset({")", "]", "}", ">"})
_CONTINUE_AFTER = frozenset({":", "|", "&", "=>"})
_CONTINUE_BEFORE = frozenset({"|", "&", "=>", "."})
_MEMBER_SEPARATORS = frozenset({";", ","})
_REGEX_PRECEDERS = frozenset(
    {"=", "(", ",", ":", "[", "!", "&", "|", "?", "{", "}", ";", "=>", "return", "typeof"}
)
_REGEX_FLAGS = re.compile(r"[A-Za-z]*")


class ParseError(Exception):
    """Raised when record-type source text cannot be tokenized or balanced."""


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    start: int
    end: int
    line: int
    newline_before: bool


def parse(source_text: str) -> dict[str, RecordTypeDefinition]:
    """Return every interface or object type alias declared in ``source_text``.

    Raises:
      ParseError: If the source contains an unterminated literal or comment, or
        unbalanced brackets.
    """
    tokens = _tokenize(source_text)
    _check_balanced(tokens)

    declarations: dict[str, RecordTypeDefinition] = {}
    index = 0
    while index < len(tokens):
        parsed = _declaration_at(tokens, index)
        if parsed is None:
            index += 1
            continue
        declaration, index = parsed
        declarations[declaration.name] = declaration

    logger.debug("Parsed %d record type declarations", len(declarations))
    return declarations


def _tokenize(source_text: str) -> list[_Token]:
    tokens: list[_Token] = []
    position = 0
    line = 1
    newline_before = False
    while position < len(source_text):
        match = _TOKEN_PATTERN.match(source_text, position)
        if match is None:  # pragma: no cover - the catch-all alternative always matches
            raise ParseError(f"Unexpected input on line {line}.")
        kind = match.lastgroup or "other"
        text = match.group()
        end = match.end()
        if kind == "other":
            _reject_unterminated(source_text, position, text, line)
            if text == "/" and _regex_allowed(tokens):
                regex_end = _regex_end(source_text, position)
                if regex_end is not None:
                    kind, end = "regex", regex_end
                    text = source_text[position:end]

        if kind == "newline" or (kind == "block_comment" and "\n" in text):
            newline_before = True
        if kind not in ("newline", "space", "line_comment", "block_comment"):
            tokens.append(
                _Token(
                    kind=kind,
                    text=text,
                    start=position,
                    end=end,
                    line=line,
                    newline_before=newline_before,
                )
            )
            newline_before = False
        line += text.count("\n") if kind != "newline" else 1
        position = end
    return tokens


def _reject_unterminated(source_text: str, position: int, text: str, line: int) -> None:
    if text in ("'", '"'):
        raise ParseError(f"Unterminated string literal on line {line}.")
    if text == "`":
        raise ParseError(f"Unterminated template literal on line {line}.")
    if text == "/" and source_text.startswith("/*", position):
        raise ParseError(f"Unterminated block comment on line {line}.")


def _regex_allowed(tokens: Sequence[_Token]) -> bool:
    return not tokens or tokens[-1].text in _REGEX_PRECEDERS


def _regex_end(source_text: str, position: int) -> int | None:
    index = position + 1
    in_class = False
    while index < len(source_text):
        character = source_text[index]
        if character in "\r\n":
            return None
        if character == "\\":
            index += 2
            continue
        if character == "[":
            in_class = True
        elif character == "]":
            in_class = False
        elif character == "/" and not in_class:
            flags = _REGEX_FLAGS.match(source_text, index + 1)
            return flags.end() if flags is not None else index + 1
        index += 1
    return None


def _check_balanced(tokens: Sequence[_Token]) -> None:
    stack: list[_Token] = []
    for token in tokens:
        if token.kind != "other":
            continue
        if token.text in _OPENERS:
            stack.append(token)
        elif token.text in _CLOSERS:
            if not stack or stack[-1].text != _CLOSERS[token.text]:
                raise ParseError(f"Unexpected '{token.text}' on line {token.line}.")
            stack.pop()
    if stack:
        raise ParseError(f"Unclosed '{stack[-1].text}' opened on line {stack[-1].line}.")


def _declaration_at(
    tokens: Sequence[_Token], index: int
) -> tuple[RecordTypeDefinition, int] | None:
    token = tokens[index]
    if token.kind != "identifier" or token.text not in ("interface", "type"):
        return None
    if index > 0 and tokens[index - 1].text == ".":
        return None
    name_token = _token(tokens, index + 1)
    if name_token is None or name_token.kind != "identifier":
        return None

    cursor = _skip_type_parameters(tokens, index + 2)
    if token.text == "interface":
        body_start = _find_interface_body(tokens, cursor)
    else:
        body_start = _find_alias_literal(tokens, cursor)
    if body_start is None:
        return None

    body_end = _matching_close(tokens, body_start)
    if token.text == "type" and not _ends_statement(tokens, body_end + 1):
        return None

    fields: dict[str, FieldDefinition] = {}
    for member in _split_members(tokens[body_start + 1 : body_end]):
        field = _parse_member(member)
        if field is not None:
            fields[field.name] = field
    return RecordTypeDefinition(name=name_token.text, fields=fields), body_end + 1


def _token(tokens: Sequence[_Token], index: int) -> _Token | None:
    return tokens[index] if 0 <= index < len(tokens) else None


def _skip_type_parameters(tokens: Sequence[_Token], index: int) -> int:
    token = _token(tokens, index)
    if token is None or token.text != "<":
        return index
    depth = 0
    while index < len(tokens):
        text = tokens[index].text
        if text in _OPENERS:
            index = _matching_close(tokens, index)
        elif text == "<":
            depth += 1
        elif text == ">":
            depth -= 1
            if depth == 0:
                return index + 1
        elif text == ";":
            return index
        index += 1
    return index


def _find_interface_body(tokens: Sequence[_Token], index: int) -> int | None:
    while index < len(tokens):
        text = tokens[index].text
        if text == "{":
            return index
        if text in (";", "}", "="):
            return None
        if text == "<":
            index = _skip_type_parameters(tokens, index)
            continue
        if text in ("(", "["):
            index = _matching_close(tokens, index)
        index += 1
    return None


def _find_alias_literal(tokens: Sequence[_Token], index: int) -> int | None:
    equals = _token(tokens, index)
    literal = _token(tokens, index + 1)
    if equals is None or equals.text != "=" or literal is None or literal.text != "{":
        return None
    return index + 1


def _ends_statement(tokens: Sequence[_Token], index: int) -> bool:
    token = _token(tokens, index)
    return token is None or token.text in (";", "}") or token.newline_before


def _matching_close(tokens: Sequence[_Token], open_index: int) -> int:
    depth = 0
    for index in range(open_index, len(tokens)):
        text = tokens[index].text
        if text in _OPENERS:
            depth += 1
        elif text in _CLOSERS:
            depth -= 1
            if depth == 0:
                return index
    raise ParseError(f"Unclosed '{tokens[open_index].text}' on line {tokens[open_index].line}.")


def _split_members(body: Sequence[_Token]) -> list[list[_Token]]:
    members: list[list[_Token]] = []
    current: list[_Token] = []
    depth = 0
    for token in body:
        if (
            depth == 0
            and current
            and token.newline_before
            and current[-1].text not in _CONTINUE_AFTER
            and token.text not in _CONTINUE_BEFORE
        ):
            members.append(current)
            current = []
        if token.text in _MEMBER_OPENERS:
            depth += 1
        elif token.text in _MEMBER_CLOSERS:
            depth = max(depth - 1, 0)
        elif depth == 0 and token.text in _MEMBER_SEPARATORS:
            if current:
                members.append(current)
            current = []
            continue
        current.append(token)
    if current:
        members.append(current)
    return members


def _parse_member(member: Sequence[_Token]) -> FieldDefinition | None:
    if (
        len(member) > 1
        and member[0].text == "readonly"
        and member[1].kind in ("identifier", "string")
    ):
        member = member[1:]

    name_token = member[0]
    if name_token.kind not in ("identifier", "string"):
        return None
    name = _unquote(name_token.text) if name_token.kind == "string" else name_token.text

    cursor = 1
    optional = cursor < len(member) and member[cursor].text == "?"
    if optional:
        cursor += 1
    if cursor == len(member):
        return FieldDefinition(name=name, type_text="any", optional=optional)
    if member[cursor].text != ":":
        return None
    type_tokens = member[cursor + 1 :]
    type_text = _render_type(type_tokens) if type_tokens else "any"
    return FieldDefinition(name=name, type_text=type_text, optional=optional)


def _render_type(type_tokens: Sequence[_Token]) -> str:
    if type_tokens[0].text in ("|", "&") and len(type_tokens) > 1:
        type_tokens = type_tokens[1:]
    parts = [type_tokens[0].text]
    for previous, token in zip(type_tokens, type_tokens[1:]):
        if token.start > previous.end:
            parts.append(" ")
        parts.append(token.text)
    return "".join(parts)


def _unquote(text: str) -> str:
    inner = text[1:-1]
    return re.sub(r"\\(.)", r"\1", inner)
