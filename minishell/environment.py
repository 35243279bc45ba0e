"""The shell's own ordered table of environment variables."""

import re

_ATOI_RE = re.compile(r"[ \t\r\n\v\f]*([+-]?)([0-9]*)")
_IDENTIFIER_CHARS = re.compile(r"[A-Za-z0-9_]*")


class InvalidIdentifierError(ValueError):
    """A name that cannot be used as a variable name."""

    def __init__(self, identifier):
        super().__init__("not a valid identifier")
        self.identifier = identifier


def _wrap_int32(value):
    return (value + 2**31) % 2**32 - 2**31


def _atoi(text):
    sign, digits = _ATOI_RE.match(text).groups()
    value = 0
    for digit in digits:
        value = _wrap_int32(value * 10 + int(digit))
    return _wrap_int32(-value if sign == "-" else value)


def is_valid_identifier(text):
    """Tell whether the part of ``text`` before any ``=`` is a valid name."""
    if not text or text[0].isdigit() and text[0] in "0123456789":
        return False
    name = text.split("=", 1)[0]
    return _IDENTIFIER_CHARS.fullmatch(name) is not None


class Environment:
    """Ordered variables; a variable may be declared without a value."""

    def __init__(self, entries=()):
        self._vars = {}
        for entry in entries:
            name, sep, value = entry.partition("=")
            self._vars[name] = value if sep else None

    @classmethod
    def from_mapping(cls, mapping):
        """Build an environment from a name-to-value mapping."""
        return cls(f"{name}={value}" for name, value in mapping.items())

    def get(self, name):
        """Return the value of ``name``, or None if unset or without value."""
        return self._vars.get(name)

    def set(self, name, value):
        """Set ``name`` to ``value``; None declares it without a value."""
        self._vars[name] = value

    def update(self, identifier):
        """Apply a ``NAME`` or ``NAME=value`` assignment."""
        name, sep, value = identifier.partition("=")
        if not is_valid_identifier(name):
            raise InvalidIdentifierError(identifier)
        self.set(name, value if sep else None)

    def unset(self, name):
        """Remove ``name`` if it holds a value."""
        if "=" in name:
            raise InvalidIdentifierError(name)
        if self._vars.get(name) is not None:
            del self._vars[name]

    def entries(self):
        """Return the variables as ``NAME=value`` or ``NAME`` strings, in order."""
        return [
            name if value is None else f"{name}={value}"
            for name, value in self._vars.items()
        ]

    def exported(self):
        """Return a mapping of the variables that hold values."""
        return {name: value for name, value in self._vars.items() if value is not None}

    def increment_shlvl(self):
        """Raise SHLVL by one, starting at 1 when it is not set."""
        current = self.get("SHLVL")
        if current is None:
            self.update("SHLVL=1")
            return
        level = _wrap_int32(_atoi(current) + 1)
        self.update(f"SHLVL={abs(level)}")