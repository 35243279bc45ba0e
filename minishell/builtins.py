"""Commands that the shell runs itself instead of starting a program."""

import os
import re
import sys

from minishell.environment import InvalidIdentifierError

PREFIX = "minishell: "

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_LEADING_INT_RE = re.compile(r"[ \t\r\n\v\f]*([+-]?)([0-9]*)")
_NUMERIC_RE = re.compile(r"[+-]?[0-9]+")


class ExitRequest(Exception):
    """Raised by ``exit`` to end the shell with ``status``."""

    def __init__(self, status):
        super().__init__(f"exit {status}")
        self.status = status


def parse_int32(text):
    """Parse the leading signed integer of ``text``; raise OverflowError past 32 bits."""
    sign, digits = _LEADING_INT_RE.match(text).groups()
    value = int(digits) if digits else 0
    if sign == "-":
        value = -value
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise OverflowError(f"{text!r} does not fit in 32 bits")
    return value


def is_numeric(text):
    """Tell whether ``text`` is an optional sign followed by decimal digits only."""
    return bool(text) and _NUMERIC_RE.fullmatch(text) is not None


def _strerror(exc):
    return os.strerror(exc.errno) if exc.errno else str(exc)


def _current_dir():
    try:
        return os.getcwd()
    except OSError:
        return "~"


def _is_interactive(out):
    try:
        return os.isatty(0) and out.isatty()
    except (OSError, ValueError, AttributeError):
        return False


def _streams(out, err):
    return (sys.stdout if out is None else out), (sys.stderr if err is None else err)


def builtin_cd(state, argv, out=None, err=None):
    """Change the working directory, keeping OLDPWD and PWD up to date."""
    out, err = _streams(out, err)
    try:
        state.env.update(f"OLDPWD={_current_dir()}")
    except InvalidIdentifierError:
        err.write(f"{PREFIX}export: not a valid identifier\n")
        return 1
    if len(argv) > 1:
        path = argv[1]
    else:
        path = state.env.get("HOME")
        if path is None:
            err.write(f"{PREFIX}cd: HOME not set\n")
            return 1
    try:
        os.chdir(path)
    except OSError as exc:
        err.write(f"{PREFIX}cd: {path}: {_strerror(exc)}\n")
        return 1
    state.env.update(f"PWD={_current_dir()}")
    return 0


def builtin_echo(state, argv, out=None, err=None):
    """Print the arguments separated by spaces; a leading ``-n`` drops the newline."""
    out, err = _streams(out, err)
    words = argv[1:]
    newline = True
    if words and words[0] == "-n":
        newline = False
        words = words[1:]
    out.write(" ".join(words))
    if newline:
        out.write("\n")
    return 0


def builtin_env(state, argv, out=None, err=None):
    """Print every variable that holds a value."""
    out, err = _streams(out, err)
    if len(argv) > 1:
        err.write(f"{PREFIX}'{argv[0]}': No such file or directory\n")
        return 127
    for entry in state.env.entries():
        if "=" in entry:
            out.write(f"{entry}\n")
    return 0


def builtin_exit(state, argv, out=None, err=None):
    """Leave the shell; return 1 instead when given too many arguments."""
    out, err = _streams(out, err)
    if _is_interactive(out):
        out.write("exit\n")
    if len(argv) < 2:
        raise ExitRequest(128 + state.signal if state.signal else 0)
    argument = argv[1]
    try:
        status = parse_int32(argument)
    except OverflowError:
        err.write(f"{PREFIX}exit: {argument}: numeric argument required\n")
        status = 2
    else:
        if not is_numeric(argument):
            err.write(f"{PREFIX}exit: {argument}: numeric argument required\n")
            status = 255
    if len(argv) > 2:
        err.write(f"{PREFIX}exit: too many arguments\n")
        return 1
    raise ExitRequest(status)


def builtin_export(state, argv, out=None, err=None):
    """List the variables, or set each ``NAME`` or ``NAME=value`` argument."""
    out, err = _streams(out, err)
    if len(argv) < 2:
        for entry in state.env.entries():
            out.write(f"declare -x {entry}\n")
        return 0
    for identifier in argv[1:]:
        try:
            state.env.update(identifier)
        except InvalidIdentifierError:
            err.write(f"{PREFIX}export: not a valid identifier\n")
            return 1
    return 0


def builtin_pwd(state, argv, out=None, err=None):
    """Print the working directory."""
    out, err = _streams(out, err)
    if len(argv) > 1:
        err.write("pwd: too many arguments\n")
        return 1
    try:
        cwd = os.getcwd()
    except OSError as exc:
        err.write(f"{PREFIX}pwd: {_strerror(exc)}\n")
        return 1
    out.write(f"{cwd}\n")
    return 0


def builtin_unset(state, argv, out=None, err=None):
    """Remove each named variable."""
    out, err = _streams(out, err)
    for name in argv[1:]:
        try:
            state.env.unset(name)
        except InvalidIdentifierError:
            err.write(f"{PREFIX}unset: not a valid identifier\n")
            return 1
    return 0


_BUILTINS = {
    "cd": builtin_cd,
    "exit": builtin_exit,
    "export": builtin_export,
    "unset": builtin_unset,
    "echo": builtin_echo,
    "pwd": builtin_pwd,
    "env": builtin_env,
}


def is_builtin(name):
    """Tell whether ``name`` is a command the shell runs itself."""
    return name in _BUILTINS


def run_builtin(state, argv, out=None, err=None):
    """Run the builtin named by ``argv[0]`` and return its status; clears any pending signal."""
    command = _BUILTINS.get(argv[0]) if argv else None
    try:
        if command is None:
            return 1
        return command(state, argv, out, err)
    finally:
        state.signal = 0