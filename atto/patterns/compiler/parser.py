"""
Tokenizer and parser for route patterns.

Implements the grammar in ``atto.patterns.grammar`` with span tracking so
syntax errors point at the offending character.
"""

from dataclasses import dataclass
from typing import List, Optional, Any, FrozenSet, Tuple
from enum import Enum

from .ast_nodes import (
    PatternAST,
    StaticSegment,
    TokenSegment,
    OptionalGroup,
    WildcardSegment,
    Span,
    BaseSegment,
)
from ..grammar import METHODS_PREFIX_RE, IDENT_START, IDENT_CHARS
from ..diagnostics.errors import PatternSyntaxError


class TokenType(str, Enum):
    """Token types for the lexer."""
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    STAR = "STAR"
    PARAM = "PARAM"
    STATIC = "STATIC"
    EOF = "EOF"


@dataclass
class PatternToken:
    """A lexical token with position information."""
    type: TokenType
    value: Any
    span: Span

    def __repr__(self) -> str:
        return f"{self.type.value}({self.value!r}) at {self.span}"


def split_methods(source: str) -> Tuple[FrozenSet[str], int]:
    """
    Split the optional HTTP method prefix off a pattern.

    Returns the upper-cased method set (empty when the pattern has no
    prefix) and the offset where the pattern body starts.
    """
    match = METHODS_PREFIX_RE.match(source)
    if not match:
        return frozenset(), 0

    methods = frozenset(
        part.strip().upper() for part in match.group("methods").split("|")
    )
    return methods, match.end()


class Tokenizer:
    """Tokenizer for route pattern bodies."""

    def __init__(self, source: str, offset: int = 0):
        self.source = source
        self.pos = offset
        self.tokens: List[PatternToken] = []

    def peek(self, offset: int = 0) -> Optional[str]:
        """Peek at character without consuming."""
        pos = self.pos + offset
        return self.source[pos] if pos < len(self.source) else None

    def advance(self) -> Optional[str]:
        """Consume and return next character."""
        if self.pos >= len(self.source):
            return None
        ch = self.source[self.pos]
        self.pos += 1
        return ch

    def at_param(self) -> bool:
        """A ':' only opens a parameter when a letter follows it."""
        return self.peek() == ":" and self.peek(1) is not None and self.peek(1) in IDENT_START

    def read_ident(self) -> str:
        """Read identifier [A-Za-z][A-Za-z0-9_]*."""
        start = self.pos
        while self.peek() is not None and self.peek() in IDENT_CHARS:
            self.advance()
        return self.source[start:self.pos]

    def read_param(self) -> Tuple[str, Optional[str]]:
        """Read ``:name`` and an optional ``<constraint>`` suffix."""
        self.advance()  # skip ':'
        name = self.read_ident()

        constraint = None
        if self.peek() == "<":
            close = self.source.find(">", self.pos + 1)
            # An empty or unterminated constraint leaves '<' as plain text
            if close > self.pos + 1:
                constraint = self.source[self.pos + 1:close]
                self.pos = close + 1

        return name, constraint

    def read_static(self) -> str:
        """Read literal text until the next structural character."""
        start = self.pos
        while self.peek() is not None and self.peek() not in "[]*" and not self.at_param():
            self.advance()
        return self.source[start:self.pos]

    def tokenize(self) -> List[PatternToken]:
        """Tokenize the source into tokens."""
        self.tokens = []

        while self.pos < len(self.source):
            start_pos = self.pos
            ch = self.peek()

            if ch == "[":
                self.advance()
                self.tokens.append(PatternToken(TokenType.LBRACKET, "[", Span(start_pos, self.pos, 1, start_pos + 1)))
            elif ch == "]":
                self.advance()
                self.tokens.append(PatternToken(TokenType.RBRACKET, "]", Span(start_pos, self.pos, 1, start_pos + 1)))
            elif ch == "*":
                self.advance()
                self.tokens.append(PatternToken(TokenType.STAR, "*", Span(start_pos, self.pos, 1, start_pos + 1)))
            elif self.at_param():
                value = self.read_param()
                self.tokens.append(PatternToken(TokenType.PARAM, value, Span(start_pos, self.pos, 1, start_pos + 1)))
            else:
                value = self.read_static()
                self.tokens.append(PatternToken(TokenType.STATIC, value, Span(start_pos, self.pos, 1, start_pos + 1)))

        self.tokens.append(PatternToken(
            TokenType.EOF,
            None,
            Span(self.pos, self.pos, 1, self.pos + 1),
        ))

        return self.tokens


class PatternParser:
    """Recursive-descent parser producing a ``PatternAST``."""

    def __init__(self, tokens: List[PatternToken], source: str = ""):
        self.tokens = tokens
        self.source = source
        self.pos = 0

    def error(self, message: str, token: Optional[PatternToken] = None, suggestions=None) -> PatternSyntaxError:
        """Create syntax error at the given (or current) token."""
        token = token or self.current()
        return PatternSyntaxError(
            message=message,
            span=token.span,
            pattern=self.source,
            suggestions=suggestions or [],
        )

    def current(self) -> PatternToken:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else self.tokens[-1]

    def advance(self) -> PatternToken:
        token = self.current()
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return token

    def match(self, *token_types: TokenType) -> bool:
        return self.current().type in token_types

    def parse(self, methods: FrozenSet[str] = frozenset()) -> PatternAST:
        """Parse tokens into AST."""
        start_span = self.current().span
        segments = self.parse_segment_list()

        if self.match(TokenType.RBRACKET):
            raise self.error(
                "Unmatched ']' in route pattern",
                suggestions=["Remove the ']' or add the matching '[' before it"],
            )

        end_span = self.current().span
        return PatternAST(
            raw=self.source,
            methods=methods,
            segments=segments,
            span=Span(start_span.start, end_span.end, 1, start_span.column),
        )

    def parse_segment_list(self) -> List[BaseSegment]:
        """Parse segments until a closing bracket or the end of input."""
        segments: List[BaseSegment] = []

        while not self.match(TokenType.EOF, TokenType.RBRACKET):
            segment = self.parse_segment()

            # Combine adjacent static segments
            if segments and isinstance(segments[-1], StaticSegment) and isinstance(segment, StaticSegment):
                segments[-1].value += segment.value
                if segments[-1].span and segment.span:
                    segments[-1].span.end = segment.span.end
            else:
                segments.append(segment)

        return segments

    def parse_segment(self) -> BaseSegment:
        token = self.current()
        if token.type == TokenType.LBRACKET:
            return self.parse_optional()
        if token.type == TokenType.STAR:
            self.advance()
            return WildcardSegment(span=token.span)
        if token.type == TokenType.PARAM:
            self.advance()
            name, constraint = token.value
            return TokenSegment(name=name, constraint=constraint, span=token.span)
        if token.type == TokenType.STATIC:
            self.advance()
            return StaticSegment(value=token.value, span=token.span)
        raise self.error(f"Expected segment, got {token.type.value}")

    def parse_optional(self) -> OptionalGroup:
        """Parse optional group [...]."""
        open_token = self.advance()
        segments = self.parse_segment_list()

        if not self.match(TokenType.RBRACKET):
            raise self.error(
                "Unclosed '[' in route pattern",
                token=open_token,
                suggestions=["Add the matching ']' to close the optional group"],
            )
        close_token = self.advance()

        if not segments:
            raise self.error(
                "Empty optional group '[]' in route pattern",
                token=open_token,
                suggestions=["Remove the '[]' or put a segment inside it"],
            )

        return OptionalGroup(
            segments=segments,
            span=Span(open_token.span.start, close_token.span.end, 1, open_token.span.column),
        )


def parse_pattern(source: str) -> PatternAST:
    """Parse a route pattern into an AST."""
    methods, offset = split_methods(source)
    tokens = Tokenizer(source, offset).tokenize()
    parser = PatternParser(tokens, source)
    return parser.parse(methods)
