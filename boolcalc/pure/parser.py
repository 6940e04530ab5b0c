"""Recursive descent parser from token streams to Expr trees.

```
<prog> ::= <expr> END_OF_INPUT
<expr> ::= TRUE
         | FALSE
         | IF <expr> THEN <expr> ELSE <expr>
         | LPAREN <expr> RPAREN
```

The grammar is LL(1): the first token of an <expr> picks the production, so the parser never backtracks. The first
mismatch raises a ParseError and nothing is returned.
"""

from boolcalc.lang.error import ParseError
from boolcalc.pure.lexical import Lexeme, Token
from boolcalc.pure.syntax import FalseExpr, IfExpr, TrueExpr

EXPR_START = frozenset([Token.TRUE, Token.FALSE, Token.IF, Token.LPAREN])


class Parser:
    """Single lookahead cursor over a token stream. source is only used for error diagnostics."""

    def __init__(self, tokens, source=""):
        self.lexemes = [Parser.as_lexeme(token, idx) for idx, token in enumerate(tokens)]
        self.source = source
        self.pos = 0

    @staticmethod
    def as_lexeme(token, idx):
        """Bare Tokens are accepted too. Their index in the stream stands in for a source position."""
        if isinstance(token, Lexeme):
            return token
        if isinstance(token, Token):
            return Lexeme(token, idx, idx + 1)
        raise TypeError(f"expected Token or Lexeme, got {type(token).__name__}")

    def peek(self):
        """Current lookahead. A stream that runs out without END_OF_INPUT is treated as if it had one."""
        if self.pos < len(self.lexemes):
            return self.lexemes[self.pos]

        end = self.lexemes[-1].end if self.lexemes else 0
        return Lexeme(Token.END_OF_INPUT, end, end)

    def advance(self):
        lexeme = self.peek()
        self.pos += 1
        return lexeme

    def error(self, expected, msg=None):
        found = self.peek()
        return ParseError(expected, found.token, found.start, self.source, found.end, msg=msg)

    def expect(self, token):
        """Consumes the lookahead if it is token, raises a ParseError otherwise."""
        if self.peek().token is not token:
            raise self.error([token])
        return self.advance()

    def parse(self):
        """<prog>: a complete expression followed by nothing. Input nested deeper than the recursion limit is reported
        as a ParseError at the token where parsing gave up.
        """
        try:
            tree = self.parse_expr()
        except RecursionError:
            raise self.error(EXPR_START, msg="expression is nested too deeply") from None

        self.expect(Token.END_OF_INPUT)
        if self.pos < len(self.lexemes):
            # hand-built streams can carry tokens after END_OF_INPUT
            raise self.error([Token.END_OF_INPUT])
        return tree

    def parse_expr(self):
        """<expr>: dispatches on the lookahead token."""
        token = self.peek().token

        if token is Token.TRUE:
            self.advance()
            return TrueExpr()

        elif token is Token.FALSE:
            self.advance()
            return FalseExpr()

        elif token is Token.IF:
            self.advance()
            condition = self.parse_expr()
            self.expect(Token.THEN)
            then_branch = self.parse_expr()
            self.expect(Token.ELSE)
            else_branch = self.parse_expr()
            return IfExpr(condition, then_branch, else_branch)

        elif token is Token.LPAREN:
            self.advance()
            inner = self.parse_expr()
            self.expect(Token.RPAREN)
            return inner

        raise self.error(EXPR_START)


def parse_tokens(tokens, source=""):
    """Parses a whole token stream into a single Expr. Raises ParseError if tokens are not exactly one expression."""
    return Parser(tokens, source).parse()
