"""Tree-walking evaluator for Wisp.

Applications whose operator is the name of a special form are handed to that form with their arguments unevaluated, so
the form decides what gets evaluated and when. Every other application evaluates its operator and arguments (left to
right) and then applies the resulting function.
"""

from wisp.grammar.tree import Application, Identifier, Literal
from wisp.lang.error import GenericException, WispSyntaxError, WispTypeError
from wisp.lang.values import Function, HostFunction, kind, represent


def evaluate(expr, scope):
    """Evaluates expr in scope and returns its value."""
    if isinstance(expr, Literal):
        return expr.value

    elif isinstance(expr, Identifier):
        return scope.lookup(expr.name, expr.start, expr.end)

    elif isinstance(expr, Application):
        operator = expr.operator
        if isinstance(operator, Identifier) and operator.name in SPECIAL_FORMS:
            return SPECIAL_FORMS[operator.name](expr, scope)

        callee = evaluate(operator, scope)
        args = [evaluate(arg, scope) for arg in expr.args]
        return apply(callee, args, expr)

    raise GenericException("cannot evaluate '{}'", repr(expr), internal=True)


def apply(callee, args, expr=None):
    """Calls callee with the already evaluated args. expr is the Application being evaluated, used to locate errors."""
    start, end = (expr.start, expr.end) if expr is not None else (None, None)

    if isinstance(callee, Function):
        if len(args) != len(callee.params):
            msg = "'{}' expects {} argument(s), got {}"
            raise WispTypeError(msg, (represent(callee), len(callee.params), len(args)), start=start, end=end)

        local = callee.scope.child()
        for param, arg in zip(callee.params, args):
            local.define(param, arg)
        return evaluate(callee.body, local)

    elif isinstance(callee, HostFunction):
        if callee.arity is not None and len(args) != callee.arity:
            msg = "'{}' expects {} argument(s), got {}"
            raise WispTypeError(msg, (callee.name, callee.arity, len(args)), start=start, end=end)

        try:
            return callee.function(*args)
        except GenericException as error:
            if error.start is None:  # builtins don't know where they were called from
                error.start, error.end = start, end
            raise

    raise WispTypeError("applying a non-function ({} '{}')", (kind(callee), represent(callee)), start=start, end=end)


def _check_arity(expr, count):
    if len(expr.args) != count:
        msg = "wrong number of arguments to '{}': expected {}, got {}"
        raise WispSyntaxError(msg, (expr.operator.name, count, len(expr.args)), start=expr.start, end=expr.end)


def _if(expr, scope):
    _check_arity(expr, 3)
    test, then, otherwise = expr.args
    if evaluate(test, scope) is not False:
        return evaluate(then, scope)
    return evaluate(otherwise, scope)


def _while(expr, scope):
    _check_arity(expr, 2)
    test, body = expr.args
    while evaluate(test, scope) is not False:
        evaluate(body, scope)
    return False  # there is no meaningful result


def _do(expr, scope):
    value = False
    for arg in expr.args:
        value = evaluate(arg, scope)
    return value


def _define(expr, scope):
    if len(expr.args) != 2 or not isinstance(expr.args[0], Identifier):
        raise WispSyntaxError("incorrect use of define", start=expr.start, end=expr.end)

    name, value = expr.args
    return scope.define(name.name, evaluate(value, scope))


def _fun(expr, scope):
    if not expr.args:
        raise WispSyntaxError("functions need a body", start=expr.start, end=expr.end)

    *params, body = expr.args
    for param in params:
        if not isinstance(param, Identifier):
            raise WispSyntaxError("parameter names must be words", start=param.start, end=param.end)

    return Function(tuple(param.name for param in params), body, scope)


SPECIAL_FORMS = {
    "if": _if,
    "while": _while,
    "do": _do,
    "define": _define,
    "fun": _fun,
}
