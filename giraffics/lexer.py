"""Tokenizer for the scene description language."""

import re
from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    IDENTIFIER = auto()  # [a-zA-Z]+
    NUMBER = auto()  # -?[0-9]+(.[0-9]+)?
    STRING = auto()  # "..." without escapes
    NEWLINE = auto()  # run of line breaks, or a comment line
    EQUAL = auto()
    COMMA = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    ERROR = auto()  # any character nothing else matches


@dataclass(frozen=True)
class Token:
    """A single token with its value and where it started in the source."""

    kind: TokenKind
    value: object = None
    line: int = 1
    column: int = 1

    def describe(self):
        """Human readable form used in error messages."""
        if self.kind is TokenKind.NEWLINE:
            text = "newline"
        elif self.kind is TokenKind.STRING:
            text = 'string "%s"' % self.value
        elif self.value is None:
            text = self.kind.name.lower()
        else:
            text = "%s '%s'" % (self.kind.name.lower(), self.value)
        return "%s at line %d, column %d" % (text, self.line, self.column)


_PUNCTUATION = {
    "=": TokenKind.EQUAL,
    ",": TokenKind.COMMA,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}

# order matters only between alternatives that can start on the same character
_TOKEN_RE = re.compile(
    r"""
    (?P<skip>[ \t\f]+)
  | (?P<comment>\#[^\n]*(?:\n|\Z))
  | (?P<newline>[\r\n]+)
  | (?P<number>-?[0-9]+(?:\.[0-9]+)?)
  | (?P<identifier>[a-zA-Z]+)
  | (?P<string>"[^"]*")
  | (?P<punct>[=,(){}])
    """,
    re.VERBOSE,
)

# \r\n, a lone \r and a lone \n each end one line
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def tokenize(text):
    """Split scene text into a list of tokens.

    Never raises: characters that start no valid token become ERROR tokens
    and it is up to the parser to reject them.
    """
    tokens = []
    pos = 0
    line = 1
    line_start = 0
    end = len(text)

    while pos < end:
        column = pos - line_start + 1
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            tokens.append(Token(TokenKind.ERROR, text[pos], line, column))
            pos += 1
            continue

        group = match.lastgroup
        lexeme = match.group()
        if group == "number":
            tokens.append(Token(TokenKind.NUMBER, float(lexeme), line, column))
        elif group == "identifier":
            tokens.append(Token(TokenKind.IDENTIFIER, lexeme, line, column))
        elif group == "string":
            tokens.append(Token(TokenKind.STRING, lexeme[1:-1], line, column))
        elif group == "punct":
            tokens.append(Token(_PUNCTUATION[lexeme], lexeme, line, column))
        elif group in ("newline", "comment"):
            tokens.append(Token(TokenKind.NEWLINE, None, line, column))

        # keep line/column bookkeeping right for multi-line lexemes
        last_break = None
        for last_break in _LINE_BREAK_RE.finditer(lexeme):
            line += 1
        if last_break is not None:
            line_start = pos + last_break.end()
        pos = match.end()

    return tokens
