"""Wisp syntax tree. Every Wisp program is a single expression, and every expression is one of

```
Literal      ; a number or a string, evaluates to itself
Identifier   ; a name, evaluates to its binding in the scope chain
Application  ; operator(args...): special form or function call
```

Nodes are immutable. start and end are the offsets of the node in the source it was parsed from and do not take part
in equality, so the same program parsed twice (or built by hand) compares equal.
"""

from dataclasses import dataclass, field
from typing import Tuple, Union


@dataclass(frozen=True)
class Expression:
    """Superclass of all syntax tree nodes."""

    @property
    def nodes(self):
        """Child expressions of this node, in source order."""
        return ()

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        Application(nodes=[
            Identifier('+'),
            Literal(1)
        ])
        """
        result = f"{'    ' * indents}{self}"
        if self.nodes:
            result = f"{'    ' * indents}{type(self).__name__}(nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}])"
        return result


@dataclass(frozen=True)
class Literal(Expression):
    value: Union[int, str]
    start: int = field(default=0, compare=False, repr=False)
    end: int = field(default=0, compare=False, repr=False)

    def __str__(self):
        return f"Literal({self.value!r})"


@dataclass(frozen=True)
class Identifier(Expression):
    name: str
    start: int = field(default=0, compare=False, repr=False)
    end: int = field(default=0, compare=False, repr=False)

    def __str__(self):
        return f"Identifier({self.name!r})"


@dataclass(frozen=True)
class Application(Expression):
    """operator(args...). The operator is itself an Application for curried calls like f(a)(b)."""
    operator: Expression
    args: Tuple[Expression, ...] = ()
    start: int = field(default=0, compare=False, repr=False)
    end: int = field(default=0, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))

    @property
    def nodes(self):
        return (self.operator,) + self.args

    def __str__(self):
        return f"{self.operator}({', '.join(str(arg) for arg in self.args)})"
