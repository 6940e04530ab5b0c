"""Abstract syntax tree for boolean expressions.

```
<expr> ::= "true"                                      ; TrueExpr
         | "false"                                     ; FalseExpr
         | "if" <expr> "then" <expr> "else" <expr>     ; IfExpr, the only nonterminal
```

Parentheses only group and leave no trace in the tree. Nodes are frozen dataclasses, so trees are immutable and
compare structurally.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class Expr(ABC):
    """Superclass of the three expression forms."""

    @property
    @abstractmethod
    def expr(self):
        """Canonical source text of this node. Parsing it gives back an equal tree."""

    @property
    def nodes(self):
        """Child nodes, in source order."""
        return []

    def display(self, indents=0):
        """Recursively displays Expr tree with readable format.

        Format:
        <Expr>(expr='<expr>', nodes=[
            <Expr>(expr='<expr>', nodes=[
                ...
                <Expr>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{self.expr}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{type(self).__name__}('{self.expr}')"

    def __str__(self):
        return self.expr


@dataclass(frozen=True, repr=False)
class TrueExpr(Expr):
    """Literal true."""

    @property
    def expr(self):
        return "true"


@dataclass(frozen=True, repr=False)
class FalseExpr(Expr):
    """Literal false."""

    @property
    def expr(self):
        return "false"


@dataclass(frozen=True, repr=False)
class IfExpr(Expr):
    """Conditional: if condition then then_branch else else_branch."""
    condition: Expr
    then_branch: Expr
    else_branch: Expr

    @property
    def expr(self):
        # branches are delimited by keywords, so no parentheses are ever needed
        return f"if {self.condition.expr} then {self.then_branch.expr} else {self.else_branch.expr}"

    @property
    def nodes(self):
        return [self.condition, self.then_branch, self.else_branch]
