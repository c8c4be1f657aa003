"""Wisp value space. Values are represented by Python objects:

```
Number    ; int or float (never bool)
String    ; str
Boolean   ; True or False, the only falsy value is False
Array     ; Array
Function  ; Function, a closure created by the fun special form
          ; HostFunction, a Python callable exposed to Wisp programs
```
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from wisp.grammar.tree import Expression
from wisp.lang.scope import Scope


@dataclass(frozen=True)
class Array:
    """Immutable ordered sequence of values."""
    elements: Tuple[Any, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "elements", tuple(self.elements))

    def __len__(self):
        return len(self.elements)

    def __getitem__(self, idx):
        return self.elements[idx]

    def __iter__(self):
        return iter(self.elements)


@dataclass(frozen=True, eq=False)
class Function:
    """Closure: parameter names, body and the scope that was active where the function was defined."""
    params: Tuple[str, ...]
    body: Expression
    scope: Scope

    def __post_init__(self):
        object.__setattr__(self, "params", tuple(self.params))


@dataclass(frozen=True, eq=False)
class HostFunction:
    """Python callable exposed to Wisp. arity is the exact number of arguments it takes (None if variadic)."""
    name: str
    function: Callable
    arity: Optional[int] = None


def is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_callable(value):
    return isinstance(value, (Function, HostFunction))


def kind(value):
    """Name of the kind of value, used in error messages."""
    if isinstance(value, bool):
        return "boolean"
    elif is_number(value):
        return "number"
    elif isinstance(value, str):
        return "string"
    elif isinstance(value, Array):
        return "array"
    elif is_callable(value):
        return "function"
    return type(value).__name__


def represent(value, nested=False):
    """Returns the text print writes for value. Strings are quoted only inside arrays."""
    if isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    elif isinstance(value, str):
        return f'"{value}"' if nested else value
    elif isinstance(value, Array):
        return "[" + ", ".join(represent(element, nested=True) for element in value) + "]"
    elif isinstance(value, Function):
        return f"fun({', '.join(value.params)})"
    elif isinstance(value, HostFunction):
        return f"<builtin {value.name}>"
    return str(value)
