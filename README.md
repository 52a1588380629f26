# tinyshell

The core of a small shell, as a Python library. It covers the path from the
line a user types to the pieces a shell needs before it runs anything.

- **Lexing**: `tinyshell.lexer.split_commands` splits an input line into
  words. It keeps quoted text and backslash escapes together and splits off
  `|`, `<`, `<<`, `>` and `>>`. `count_commands` estimates how many words a
  line holds. `is_builtin`, `is_redirect`, `is_input_redirect`,
  `is_output_redirect`, `is_delimiter` and `get_quote` (with the
  `QuoteType` enum) are the small helpers behind them.
- **Environment**: `tinyshell.environment.Environment` is an ordered list of
  `NAME=value` entries. It offers `getenv`, `find_entry`, `value_of`,
  `find_path`, `index_of`, `append`, `replace`, `remove`,
  `replace_oldpwd`, `save_oldpwd`, `increment_shlvl` and `format`. The
  `format` method renders the entries the way `env` prints them.
- **Expansion**: `tinyshell.expansion.expand_variable(env, text, status)`
  replaces each `$NAME` with its value. A name runs up to the next space,
  tab, newline or `$`. An unset name expands to nothing. An unset name that
  starts with `?` gives the last status. `QuoteState.update` follows single
  quotes, double quotes and backslash escapes one character at a time.
  `extract_var_name` and `check_valid_var` are also public.
- **Tokenizing**: `tinyshell.tokens.tokenize(words, env, status)` groups the
  words into one `Token` per pipeline stage. Each token holds the command's
  arguments, its redirections and any here-document delimiter. The function
  returns the tokens and the new status. A missing redirection target or a
  trailing pipe raises `ShellSyntaxError`, whose `status` attribute holds
  the exit status. `resolve_command_path` looks a command up along `PATH`.
- **Builtins**: `tinyshell.builtins` provides `echo`, `export`,
  `check_valid_export`, `unset`, `cd`, `resolve_cd_path`, `pwd`,
  `exit_command`, `print_history` and `print_env`. They work on a
  `ShellState` and write to the streams you pass in. `exit_command` raises
  `ShellExit` with the status the shell should end with.
- **Prompt**: `tinyshell.prompt` builds the coloured `user@host:~cwd$ `
  prompt with `build_prompt`. It also handles the `setcolour` builtin
  (`set_colour`, `colour_code`) and reads the host name from
  `SESSION_MANAGER` (`session_name`, `full_name`). `init_state` builds a
  fresh `ShellState` from an environment and raises `SHLVL` by one.
  `decode_exit_status` turns a raw wait status into a `$?` value.
- **Redirections**: `tinyshell.redirections` opens the files a token
  redirects from (`open_input`) and to (`open_output`). It also reads
  here-documents (`here_doc`, `iter_lines`). A file that cannot be opened
  raises `RedirectionError`, unless the token's `access` flag is set.

## Example

```python
from tinyshell.lexer import split_commands
from tinyshell.environment import Environment
from tinyshell.expansion import expand_variable

words = split_commands("echo hello | cat > out.txt")
# ['echo', 'hello', '|', 'cat', '>', 'out.txt']

env = Environment(["HOME=/home/demo", "SHLVL=1"])
env.increment_shlvl()
print(env.getenv("SHLVL"))                        # 2
print(expand_variable(env, "home is $HOME", 0))   # home is /home/demo
```

Builtins take the shell state and the streams to write to:

```python
import io

from tinyshell.prompt import init_state
from tinyshell.builtins import echo

state = init_state({"HOME": "/home/demo", "LOGNAME": "demo"})
out = io.StringIO()
echo(state, ["echo", "-n", "hi"], out)
print(repr(out.getvalue()))   # 'hi'
```

## What it does not do

This package is a library and has no command to start. It has no
interactive read loop and no line editing. It does not install signal
handlers. It does not run commands: it neither starts programs nor connects
pipeline stages to one another. `resolve_command_path` only finds the
program a token names. Putting these pieces together into a running shell
is left to the caller.

## Tests

The test suite uses pytest, which is listed under the `test` extra.