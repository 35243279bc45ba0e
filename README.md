# minishell

minishell is a Python library that holds the pieces of a small POSIX-style
shell. It splits command lines into tokens and checks the order of the
operators. It expands variables, quotes and wildcards, and keeps an ordered
table of environment variables. It also runs the shell's builtin commands and
finds programs on `PATH`.

## Installing

```
pip install .
```

## Modules

- `minishell.lexer`
  - `pad_operators(line)` puts spaces around `|`, `||`, `&&`, `<`, `>`, `<<`
    and `>>`.
  - `tokenize(line)` splits a line into tokens. Quoted text and
    parenthesised groups stay whole. An unclosed quote or an unbalanced
    parenthesis raises `ShellSyntaxError`.
  - `check_syntax(tokens)` raises `ShellSyntaxError` when an operator is
    misplaced. Otherwise it returns the tokens.
  - `command_name(tokens)` and `strip_redirections(tokens)` skip redirection
    operators together with their targets.
- `minishell.pattern`
  - `match_pattern(pattern, name)` matches a name against a pattern. `*`
    matches any run of characters and `?` matches any one character.
  - `contains_wildcard(pattern)` tells whether a pattern holds an unquoted
    `*` or `?`.
  - `expand_wildcard(pattern, directory=".")` returns the sorted names in a
    directory that match the pattern. Hidden names match only when the
    pattern starts with `.`. When nothing matches it returns `[pattern]`.
- `minishell.environment`
  - `Environment` keeps variables in order. A variable may be declared
    without a value. Its methods are `get`, `set`, `update("NAME=value")`,
    `unset`, `entries`, `exported` and `increment_shlvl`.
  - `is_valid_identifier(text)` checks a variable name.
  - An invalid name raises `InvalidIdentifierError`.
- `minishell.state`
  - `ShellState` holds the environment, the positional arguments, the last
    exit status and a pending signal number.
  - `PipeFlag` marks where a command is connected to a pipe.
- `minishell.expansion`
  - `mark_quotes` and `remove_quotes` handle quoting.
  - `expand_variables` expands `$NAME`, `$?` and `$0`..`$9`, but not inside
    single quotes.
  - `split_words` splits expanded text into words.
  - `expand_word` and `expand_tokens` do the whole expansion. `expand_tokens`
    includes wildcard expansion in the current directory.
- `minishell.builtins`
  - The builtins are `echo`, `cd`, `pwd`, `export`, `unset`, `env` and
    `exit`.
  - `run_builtin(state, argv, out, err)` runs one of them. It writes to the
    given streams, or to standard output and standard error when they are
    not given, and returns the exit status.
  - `exit` raises `ExitRequest`, which carries the requested status.
  - `is_builtin(name)` tells whether a name is a builtin.
- `minishell.resolve`
  - `resolve_command(env, name)` finds the program to run. A name starting
    with `/`, `./` or `../` is used as given. Any other name is looked up on
    `PATH`.
  - When no program can be run, `resolve_command` raises `CommandLookupError`.
    Its `status` is 127 when the command is not found and 126 when the name
    is a directory.
  - `decode_wait_status`, `wait_child` and `wait_all` turn child process
    statuses into shell exit statuses.

## Example

```python
import io

from minishell.environment import Environment
from minishell.expansion import expand_tokens
from minishell.lexer import check_syntax, tokenize
from minishell.pattern import match_pattern
from minishell.builtins import run_builtin
from minishell.state import ShellState

tokens = check_syntax(tokenize("cat < in.txt | sort > out.txt"))
# ['cat', '<', 'in.txt', '|', 'sort', '>', 'out.txt']

match_pattern("*.txt", "notes.txt")  # True

state = ShellState(env=Environment.from_mapping({"HOME": "/tmp"}))
expand_tokens(state, ["$HOME"])  # ['/tmp']

out = io.StringIO()
run_builtin(state, ["echo", "-n", "hi"], out)  # returns 0; out holds "hi"
```

## What it does not do

The package has no interactive prompt and no command to start. It also does
not run command lines.

It can resolve a program on `PATH` and decode the statuses of child
processes. It does not start pipelines, open redirection files, read
here-documents, run subshells or chain commands with `&&` and `||`.