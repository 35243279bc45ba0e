"""Splitting a command line into shell tokens and checking their order."""

import re

REDIRECTIONS = frozenset({"<<", ">>", "<", ">"})
CONTROL_OPERATORS = frozenset({"|", "||", "&&"})

# An operator together with the single character that follows it; that
# character is copied through untouched, without padding of its own.
_OPERATOR_RE = re.compile(r"(&&|\|\||>>|<<|[|<>])(.?)", re.DOTALL)
_QUOTES = "'\""


class ShellSyntaxError(ValueError):
    """A command line that cannot be parsed."""


def _unexpected(token):
    return ShellSyntaxError(f"syntax error near unexpected token `{token}'")


def pad_operators(line):
    """Surround every operator in ``line`` with spaces."""
    return _OPERATOR_RE.sub(r" \1 \2", line)


def _cut_slice(text, pos):
    """Return the (start, end) bounds of the word that begins at or after ``pos``."""
    length = len(text)
    index = pos
    while index < length and text[index] == " ":
        index += 1
    start = index
    depth = 0
    while index < length and (text[index] != " " or depth) and depth >= 0:
        char = text[index]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char in _QUOTES:
            closing = text.find(char, index + 1)
            if closing == -1:
                raise ShellSyntaxError("syntax error")
            index = closing
        index += 1
    if depth != 0:
        raise ShellSyntaxError("syntax error")
    return start, index


def tokenize(line):
    """Split ``line`` into raw tokens, keeping quotes and parenthesised groups whole."""
    text = pad_operators(line)
    tokens = []
    pos = 0
    while True:
        start, end = _cut_slice(text, pos)
        if start == end and end == len(text):
            return tokens
        tokens.append(text[start:end])
        pos = end + 1 if end < len(text) else end


def _is_operator(token):
    return token in REDIRECTIONS or token in CONTROL_OPERATORS


def check_syntax(tokens):
    """Check operator placement in ``tokens``; return them or raise ShellSyntaxError."""
    tokens = list(tokens)
    followers = [*tokens[1:], None]
    for index, (token, following) in enumerate(zip(tokens, followers)):
        if token in REDIRECTIONS:
            if following is None:
                raise _unexpected("newline")
            if _is_operator(following):
                raise _unexpected(following)
        elif token in CONTROL_OPERATORS:
            if following is None or index == 0:
                raise _unexpected(token)
            if following in CONTROL_OPERATORS:
                raise _unexpected(following)
    return tokens


def is_redirection(token):
    """Tell whether ``token`` is a redirection operator."""
    return token in REDIRECTIONS


def command_name(tokens):
    """Return the first token that is neither a redirection nor its target."""
    words = iter(tokens)
    for token in words:
        if is_redirection(token):
            next(words, None)
        else:
            return token
    return None


def strip_redirections(tokens):
    """Return ``tokens`` without redirection operators and their targets."""
    kept = []
    words = iter(tokens)
    for token in words:
        if is_redirection(token):
            next(words, None)
        else:
            kept.append(token)
    return kept