"""Finding the program behind a command name and collecting child statuses."""

import errno
import os
import signal

PATH_MAX = 4096
_EXPLICIT_PREFIXES = ("/", "./", "../")


class CommandLookupError(Exception):
    """A command that cannot be run; ``status`` is the shell's exit status for it."""

    def __init__(self, status, message):
        super().__init__(message)
        self.status = status
        self.message = message


def _check_explicit(name):
    try:
        info = os.stat(name)
    except OSError as exc:
        raise CommandLookupError(1, exc.strerror or os.strerror(exc.errno)) from exc
    if os.path.isdir(name) and info is not None:
        raise CommandLookupError(126, f"{name}: Is a directory")
    return name


def _search_path(env, name):
    search = env.get("PATH")
    if search is None:
        return None
    for directory in (part for part in search.split(":") if part):
        candidate = f"{directory}/{name}"
        if len(candidate) < PATH_MAX and os.access(candidate, os.X_OK):
            return candidate
    return None


def resolve_command(env, name):
    """Return the path to run for ``name``, searching PATH unless it names a path."""
    if len(name) >= PATH_MAX:
        raise CommandLookupError(1, os.strerror(errno.ENAMETOOLONG))
    if name.startswith(_EXPLICIT_PREFIXES):
        return _check_explicit(name)
    found = _search_path(env, name)
    if found is None:
        raise CommandLookupError(127, f"{name}: command not found")
    return found


def decode_wait_status(status):
    """Turn a raw wait status into a shell exit status."""
    if os.WIFEXITED(status):
        return os.WEXITSTATUS(status)
    if os.WIFSIGNALED(status):
        return 128 + os.WTERMSIG(status)
    if os.WIFSTOPPED(status):
        return 128 + signal.SIGSTOP
    if os.WIFCONTINUED(status):
        return 128 + signal.SIGCONT
    return 1


def wait_child(pid):
    """Wait for ``pid`` to exit or stop; return its status, or -1 if it cannot be waited for."""
    try:
        _, status = os.waitpid(pid, os.WUNTRACED)
    except ChildProcessError:
        return -1
    return decode_wait_status(status)


def wait_all(victim):
    """Reap every child; return the status of ``victim``, or 1 if it was not seen."""
    result = 1
    while True:
        try:
            pid, status = os.waitpid(-1, os.WUNTRACED)
        except ChildProcessError:
            return result
        decoded = decode_wait_status(status)
        if pid == victim:
            result = decoded