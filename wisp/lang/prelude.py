"""Bindings every Wisp program starts with: true/false, arithmetic and comparison operators, print, and arrays."""

import operator

from wisp.lang.error import WispRangeError, WispTypeError
from wisp.lang.scope import Scope
from wisp.lang.values import Array, HostFunction, is_number, kind, represent


def _operands(name, a, b, strings=False):
    if is_number(a) and is_number(b):
        return
    if strings and isinstance(a, str) and isinstance(b, str):
        return
    expected = "numbers or strings" if strings else "numbers"
    raise WispTypeError("'{}' expects {}, got {} and {}", (name, expected, kind(a), kind(b)))


def _arithmetic(name, op, strings=False):
    def _apply(a, b):
        _operands(name, a, b, strings)
        return op(a, b)
    return HostFunction(name, _apply, 2)


def _divide(a, b):
    _operands("/", a, b)
    if b == 0:
        raise WispRangeError("division by zero")

    if isinstance(a, int) and isinstance(b, int) and a % b == 0:
        return a // b

    try:
        return a / b
    except OverflowError:
        raise WispRangeError("division result out of range")


def equals(a, b):
    """Values are equal if they are of the same kind and have the same contents. Functions are equal only to
    themselves.
    """
    if kind(a) != kind(b):
        return False
    if isinstance(a, Array):
        return len(a) == len(b) and all(equals(x, y) for x, y in zip(a, b))
    if kind(a) == "function":
        return a is b
    return a == b


def _print(output):
    def _apply(value):
        output(represent(value))
        return value
    return HostFunction("print", _apply, 1)


def length(array):
    if not isinstance(array, Array):
        raise WispTypeError("argument to length must be an array, got {}", kind(array))
    return len(array)


def element(array, n):
    if not isinstance(array, Array):
        raise WispTypeError("first argument to element must be an array, got {}", kind(array))
    if not is_number(n):
        raise WispTypeError("second argument to element must be a number, got {}", kind(n))

    if isinstance(n, float) and not n.is_integer() or not 0 <= n < len(array):
        raise WispRangeError("index {} out of range for array of length {}", (represent(n), len(array)))
    return array[int(n)]


def create_global_scope(output=None):
    """Returns a new global scope. output is called with the text of every print (defaults to printing it)."""
    if output is None:
        output = print

    scope = Scope()
    scope.define("true", True)
    scope.define("false", False)

    for func in [
        _arithmetic("+", operator.add, strings=True),
        _arithmetic("-", operator.sub),
        _arithmetic("*", operator.mul),
        HostFunction("/", _divide, 2),
        HostFunction("==", equals, 2),
        _arithmetic("<", operator.lt, strings=True),
        _arithmetic(">", operator.gt, strings=True),
        _print(output),
        HostFunction("array", lambda *values: Array(values)),
        HostFunction("length", length, 1),
        HostFunction("element", element, 2),
    ]:
        scope.define(func.name, func)

    return scope
