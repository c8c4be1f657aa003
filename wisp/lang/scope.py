"""Chained variable environments."""

from wisp.lang.error import WispReferenceError


class Scope:
    """Mapping of names to values, with a parent scope that is consulted for names not bound locally. Writes never go
    to the parent: defining a name that an ancestor binds shadows it in this scope only.
    """

    def __init__(self, parent=None, bindings=None):
        self.parent = parent
        self.bindings = dict(bindings) if bindings else {}

    def child(self):
        """Returns a new, empty scope whose parent is self."""
        return Scope(self)

    def lookup(self, name, start=None, end=None):
        """Returns the value bound to name in the closest scope that binds it. start/end locate the reference in the
        source for the error raised when name is unbound.
        """
        scope = self
        while scope is not None:
            if name in scope.bindings:
                return scope.bindings[name]
            scope = scope.parent
        raise WispReferenceError("undefined binding: '{}'", name, start=start, end=end)

    def define(self, name, value):
        """Binds name to value in this scope."""
        self.bindings[name] = value
        return value

    def __repr__(self):
        depth = 0
        scope = self.parent
        while scope is not None:
            depth += 1
            scope = scope.parent
        return f"Scope(names={sorted(self.bindings)}, depth={depth})"
