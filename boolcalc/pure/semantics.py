"""Big-step evaluation of Expr trees.

```
    true ⇓ true        false ⇓ false

    c ⇓ true    t ⇓ v                      c ⇓ false    f ⇓ v
    ------------------------------         ------------------------------
    if c then t else f ⇓ v                 if c then t else f ⇓ v
```

The condition is always evaluated first, and then exactly one branch. The branch that is not taken is never looked
at, not even to check its shape.
"""

from dataclasses import dataclass
from typing import List, Optional

from boolcalc.pure.syntax import Expr, FalseExpr, IfExpr, TrueExpr


@dataclass(frozen=True)
class Judgment:
    """One fact of a derivation: term ⇓ value, where depth is how far term is nested below the root."""
    term: Expr
    value: bool
    depth: int

    def __str__(self):
        return f"{self.term.expr} ⇓ {format_value(self.value)}"


def format_value(value):
    """Boolean results are written the way they are spelt in the language."""
    return "true" if value else "false"


def evaluate(term: Expr, trace: Optional[List[Judgment]] = None) -> bool:
    """Reduces term to a bool. If trace is a list, a Judgment is appended to it for every sub-term that is evaluated,
    in the order evaluations finish.
    """

    def _evaluate(term, depth):
        if isinstance(term, TrueExpr):
            value = True
        elif isinstance(term, FalseExpr):
            value = False
        elif isinstance(term, IfExpr):
            if _evaluate(term.condition, depth + 1):
                value = _evaluate(term.then_branch, depth + 1)
            else:
                value = _evaluate(term.else_branch, depth + 1)
        else:
            raise TypeError(f"cannot evaluate {type(term).__name__}, expected an Expr")

        if trace is not None:
            trace.append(Judgment(term, value, depth))
        return value

    return _evaluate(term, 0)


def derivation(trace):
    """Renders a trace as an indented derivation. Premises are printed before their conclusion, one level deeper."""
    lines = []
    for judgment in trace:
        lines.append("  " * judgment.depth + str(judgment))
    return "\n".join(lines)
