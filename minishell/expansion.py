"""Quote marking, variable expansion, word splitting and globbing of tokens."""

from minishell.pattern import DOUBLE_QUOTE, QUOTE_MARKS, SINGLE_QUOTE, expand_wildcard

_MARK_FOR = {"'": SINGLE_QUOTE, '"': DOUBLE_QUOTE}
_NAME_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_"
)
_DIGITS = "0123456789"


def mark_quotes(text):
    """Replace each matched pair of quotes with quote markers."""
    chars = list(text)
    index = 0
    while index < len(chars):
        char = chars[index]
        if char in _MARK_FOR:
            try:
                closing = chars.index(char, index + 1)
            except ValueError:
                break
            chars[index] = chars[closing] = _MARK_FOR[char]
            index = closing
        index += 1
    return "".join(chars)


def remove_quotes(text):
    """Drop the quote markers that open and close quoted runs."""
    kept = []
    quote = ""
    for char in text:
        if char in QUOTE_MARKS and (quote == char or not quote):
            quote = "" if quote else char
        else:
            kept.append(char)
    return "".join(kept)


def _variable_value(state, text, index):
    start = index
    while index < len(text) and text[index] in _NAME_CHARS:
        index += 1
    if index == start:
        return "$", index
    value = state.env.get(text[start:index])
    return (value if value is not None else ""), index


def _expand_dollar(state, text, index):
    """Expand the ``$`` at ``index``; return the value and the next index."""
    index += 1
    following = text[index] if index < len(text) else ""
    if following == "?":
        return state.status_text(), index + 1
    if following in ("", " "):
        return "$", index
    if following in QUOTE_MARKS:
        return "", index
    if following in _DIGITS:
        return state.positional(int(following)), index + 1
    return _variable_value(state, text, index)


def expand_variables(state, text):
    """Expand ``$`` references outside single-quoted runs of ``text``."""
    pieces = []
    quote = ""
    index = 0
    while index < len(text):
        char = text[index]
        if char in QUOTE_MARKS and not quote:
            quote = char
        elif char == quote:
            quote = ""
        elif char == "$" and quote != SINGLE_QUOTE:
            value, index = _expand_dollar(state, text, index)
            pieces.append(value)
            continue
        pieces.append(char)
        index += 1
    return "".join(pieces)


def split_words(text):
    """Split ``text`` on spaces, keeping quoted runs inside their words."""
    words = []
    length = len(text)
    index = 0
    while True:
        while index < length and text[index] == " ":
            index += 1
        start = index
        while index < length and text[index] != " ":
            if text[index] in QUOTE_MARKS:
                closing = text.find(text[index], index + 1)
                index = length - 1 if closing == -1 else closing
            index += 1
        if start == index:
            return words
        words.append(text[start:index])
        index += 1


def expand_word(state, word):
    """Mark quotes, expand variables and split one token into words."""
    expanded = expand_variables(state, mark_quotes(word))
    return split_words(expanded) or [expanded]


def expand_tokens(state, tokens):
    """Expand every token into its final words, globbing in the working directory."""
    words = []
    for token in tokens:
        for piece in expand_word(state, token):
            words.extend(expand_wildcard(piece))
    return [remove_quotes(word) for word in words]