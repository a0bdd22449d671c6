"""Lexical scopes. An Environment maps names to Objects and may be enclosed by an outer Environment; lookups walk
outwards, nearest scope first, while bindings always land in the innermost scope.

Environments are shared by reference: a Function keeps the Environment it was created in, so a scope lives as long as
the call that made it or any closure that captured it.
"""


class Environment:

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    @classmethod
    def enclosed(cls, outer):
        """Returns a new, empty Environment whose lookups fall back to outer."""
        return cls(outer)

    def get(self, name):
        """Returns the Object bound to name in this scope or the nearest enclosing one, or None if unbound."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name, value):
        """Binds name to value in this scope only (never in an enclosing one). Returns value."""
        self.store[name] = value
        return value

    def __contains__(self, name):
        return self.get(name) is not None

    def __repr__(self):
        return f"Environment({sorted(self.store)}, outer={self.outer is not None})"
