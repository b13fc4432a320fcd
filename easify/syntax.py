"""
Parser for textual slot declarations.

Turns the surface form used at call sites into :class:`SlotSpec` lists::

    a, *b, mut c          -> [a], [*b], [mut c]
    first, *mut rest = xs -> slots plus the source expression text

The grammar is deliberately small::

    slots := slot (',' slot)* [',']
    slot  := ['mut'] ['*'] NAME | '*' 'mut' NAME

More than one ``*`` marker is accepted here and rejected by the compiler, so
that a malformed pattern always surfaces as :class:`MalformedPattern`.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .errors import SlotSyntaxError
from .pattern import SlotSpec

MUT_KEYWORD = "mut"
REST_MARKER = "*"

_TOKEN_RE = re.compile(r"[^\W\d]\w*|\*|,|=|\S")
_NAME_RE = re.compile(r"[^\W\d]\w*\Z")

Token = Tuple[str, int]


class SlotDeclarationParser:
    """Recursive-descent parser over a tokenized slot declaration."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.tokens: List[Token] = self._tokenize(source)
        self.token_pos = 0

    @staticmethod
    def _tokenize(source: str) -> List[Token]:
        return [(match.group(0), match.start()) for match in _TOKEN_RE.finditer(source)]

    def current_token(self) -> Optional[str]:
        if self.token_pos < len(self.tokens):
            return self.tokens[self.token_pos][0]
        return None

    def current_column(self) -> int:
        if self.token_pos < len(self.tokens):
            return self.tokens[self.token_pos][1]
        return len(self.source)

    def consume(self) -> str:
        if self.token_pos >= len(self.tokens):
            raise SlotSyntaxError(
                "Unexpected end of slot declaration",
                source=self.source,
                column=len(self.source),
                hint="A trailing '*' or 'mut' must be followed by a slot name",
            )
        token = self.tokens[self.token_pos][0]
        self.token_pos += 1
        return token

    def expect(self, expected: str) -> None:
        column = self.current_column()
        token = self.consume()
        if token != expected:
            raise SlotSyntaxError(
                f"Expected '{expected}' but got '{token}'",
                source=self.source,
                column=column,
                hint="Separate slots with commas",
            )

    def try_consume(self, expected: str) -> bool:
        if self.current_token() == expected:
            self.consume()
            return True
        return False

    def word(self) -> str:
        column = self.current_column()
        token = self.consume()
        if not _NAME_RE.match(token) or token == MUT_KEYWORD:
            raise SlotSyntaxError(
                f"Expected a slot name but got '{token}'",
                source=self.source,
                column=column,
            )
        return token

    def parse_slot(self) -> SlotSpec:
        mutable = self.try_consume(MUT_KEYWORD)
        is_rest = self.try_consume(REST_MARKER)
        if is_rest and not mutable:
            mutable = self.try_consume(MUT_KEYWORD)
        name = self.word()
        return SlotSpec(name=name, mutable=mutable, is_rest=is_rest)

    def parse(self) -> List[SlotSpec]:
        if not self.tokens:
            raise SlotSyntaxError(
                "Slot declaration is empty",
                source=self.source,
                column=0,
            )
        specs: List[SlotSpec] = []
        while True:
            specs.append(self.parse_slot())
            if self.current_token() is None:
                break
            self.expect(",")
            if self.current_token() is None:
                break
        return specs


def parse_slots(text: str) -> List[SlotSpec]:
    """Parse ``"a, *b, mut c"`` into slot specs."""
    return SlotDeclarationParser(text).parse()


def parse_unpack_statement(text: str) -> Tuple[List[SlotSpec], str]:
    """
    Split ``"a, *b, c = source"`` into slot specs and the source text.

    The source text is returned stripped and is not interpreted.
    """
    positions = [index for index, char in enumerate(text) if char == "="]
    if not positions:
        raise SlotSyntaxError(
            "Unpack statement is missing '='",
            source=text,
            column=len(text),
            hint="Write the statement as 'a, *b, c = source'",
        )
    if len(positions) > 1:
        raise SlotSyntaxError(
            "Unpack statement contains more than one '='",
            source=text,
            column=positions[1],
        )
    split_at = positions[0]
    declaration = text[:split_at]
    source = text[split_at + 1:].strip()
    if not source:
        raise SlotSyntaxError(
            "Unpack statement has no source after '='",
            source=text,
            column=split_at,
        )
    return parse_slots(declaration), source


__all__ = [
    "SlotDeclarationParser",
    "parse_slots",
    "parse_unpack_statement",
]
