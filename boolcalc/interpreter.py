"""Boolean expression interpreter.

Basic program flow:
    1. Lexer: turns source text into a list of tokens (boolcalc/pure/lexical.py)
    2. Parser: recursive descent over the tokens, producing an Expr tree (boolcalc/pure/parser.py)
    3. Evaluator: big-step reduction of the tree to a bool (boolcalc/pure/semantics.py)

Everything in here is a pure function, so calls can be repeated or made from several threads at once.
"""

from boolcalc.pure.lexical import tokenize
from boolcalc.pure.parser import parse_tokens
from boolcalc.pure.semantics import evaluate


def parse(source):
    """Tokenizes and parses source. Raises LexError or ParseError."""
    return parse_tokens(tokenize(source), source)


def eval(term, trace=None):
    """Evaluates a parsed Expr to a bool. See evaluate for trace."""
    return evaluate(term, trace)
