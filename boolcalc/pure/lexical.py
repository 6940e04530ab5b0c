"""Boolean expression token generator.

The `pure` directory contains the language itself: tokens, syntax tree, parser and evaluator. Nothing in here knows
about files, sessions or the shell.

The lexical grammar is a fixed set of strings:

```
<token> ::= "true" | "false"        ; literals
          | "if" | "then" | "else"  ; conditional keywords
          | "(" | ")"               ; grouping
```

Keywords are case-sensitive and there is no identifier class, so a single greedy pass is enough: at each position
the first rule whose string matches wins. Spaces and tabs separate tokens and are otherwise ignored. Every token
stream ends with exactly one END_OF_INPUT token.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from boolcalc.lang.error import LexError


class Token(Enum):
    """Tokens of the boolean expression language. Values are their surface spelling."""
    TRUE = "true"
    FALSE = "false"
    IF = "if"
    THEN = "then"
    ELSE = "else"
    LPAREN = "("
    RPAREN = ")"
    END_OF_INPUT = "end of input"

    @property
    def label(self):
        """Spelling used in error messages."""
        if self is Token.END_OF_INPUT:
            return self.value
        return f"'{self.value}'"

    @property
    def order(self):
        """Position in the grammar, so that token sets are listed the same way every time."""
        return list(Token).index(self)

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Lexeme:
    """A token and the span of source it was read from. end is exclusive."""
    token: Token
    start: int
    end: int

    def __repr__(self):
        return f"Lexeme({self.token.name}, {self.start}:{self.end})"


class Lexer:
    """Single pass scanner over a string of boolean expression source."""
    WHITESPACE = " \t"
    RULES = [Token.TRUE, Token.FALSE, Token.IF, Token.THEN, Token.ELSE, Token.LPAREN, Token.RPAREN]

    def __init__(self, source):
        self.source = source
        self.pos = 0

    def skip_whitespace(self):
        while self.pos < len(self.source) and self.source[self.pos] in Lexer.WHITESPACE:
            self.pos += 1

    def next(self):
        """Returns the next Lexeme and advances past it. Once the source is exhausted, END_OF_INPUT is returned."""
        self.skip_whitespace()

        if self.pos >= len(self.source):
            return Lexeme(Token.END_OF_INPUT, len(self.source), len(self.source))

        for token in Lexer.RULES:
            if self.source.startswith(token.value, self.pos):
                start, self.pos = self.pos, self.pos + len(token.value)
                return Lexeme(token, start, self.pos)

        raise LexError(self.source[self.pos], self.pos, self.source)

    def tokenize(self):
        """Scans the rest of the source. The returned list always ends with a single END_OF_INPUT Lexeme."""
        lexemes = []
        while True:
            lexeme = self.next()
            lexemes.append(lexeme)
            if lexeme.token is Token.END_OF_INPUT:
                return lexemes


def tokenize(source: str) -> List[Lexeme]:
    """Converts source text to a list of Lexemes. Raises LexError on the first unrecognized character."""
    return Lexer(source).tokenize()
