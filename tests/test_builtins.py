import io
import os

import pytest

from minishell.builtins import (
    ExitRequest,
    builtin_cd,
    builtin_echo,
    builtin_env,
    builtin_exit,
    builtin_export,
    builtin_pwd,
    builtin_unset,
    is_builtin,
    is_numeric,
    parse_int32,
    run_builtin,
)
from minishell.environment import Environment
from minishell.state import ShellState


@pytest.fixture
def state():
    return ShellState(env=Environment(["HOME=/nowhere", "PATH=/bin", "EMPTY"]))


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


@pytest.mark.parametrize(
    "text, expected",
    [("42", 42), ("  -7xyz", -7), ("+5", 5), ("", 0),
     ("2147483647", 2147483647), ("-2147483648", -2147483648)],
)
def test_parse_int32(text, expected):
    assert parse_int32(text) == expected


@pytest.mark.parametrize("text", ["2147483648", "-2147483649", "99999999999"])
def test_parse_int32_overflow(text):
    with pytest.raises(OverflowError):
        parse_int32(text)


@pytest.mark.parametrize(
    "text, expected",
    [("+5", True), ("-12", True), ("0", True), ("-", False), ("", False),
     ("1a", False), (" 1", False)],
)
def test_is_numeric(text, expected):
    assert is_numeric(text) is expected


@pytest.mark.parametrize("name", ["cd", "exit", "export", "unset", "echo", "pwd", "env"])
def test_is_builtin_known(name):
    assert is_builtin(name) is True


@pytest.mark.parametrize("name", ["ls", "", "ECHO", "cat"])
def test_is_builtin_unknown(name):
    assert is_builtin(name) is False


def test_echo_joins_words(state, streams):
    out, err = streams
    assert builtin_echo(state, ["echo", "a", "b"], out, err) == 0
    assert out.getvalue() == "a b\n"


def test_echo_without_newline(state, streams):
    out, err = streams
    builtin_echo(state, ["echo", "-n", "hi"], out, err)
    assert out.getvalue() == "hi"


def test_echo_only_exact_dash_n(state, streams):
    out, err = streams
    builtin_echo(state, ["echo", "-nn", "x"], out, err)
    assert out.getvalue() == "-nn x\n"


def test_env_prints_valued_entries(state, streams):
    out, err = streams
    assert builtin_env(state, ["env"], out, err) == 0
    assert out.getvalue().splitlines() == ["HOME=/nowhere", "PATH=/bin"]


def test_env_with_argument(state, streams):
    out, err = streams
    assert builtin_env(state, ["env", "x"], out, err) == 127
    assert "'env': No such file or directory" in err.getvalue()
    assert out.getvalue() == ""


def test_export_lists(state, streams):
    out, err = streams
    assert builtin_export(state, ["export"], out, err) == 0
    assert out.getvalue().splitlines() == [
        "declare -x HOME=/nowhere",
        "declare -x PATH=/bin",
        "declare -x EMPTY",
    ]


def test_export_sets(state, streams):
    out, err = streams
    assert builtin_export(state, ["export", "FOO=bar", "BAZ"], out, err) == 0
    assert state.env.get("FOO") == "bar"
    assert "BAZ" in state.env.entries()


def test_export_invalid(state, streams):
    out, err = streams
    assert builtin_export(state, ["export", "1X=2"], out, err) == 1
    assert err.getvalue() == "minishell: export: not a valid identifier\n"


def test_unset_removes(state, streams):
    out, err = streams
    assert builtin_unset(state, ["unset", "PATH"], out, err) == 0
    assert state.env.get("PATH") is None
    assert state.env.get("HOME") == "/nowhere"


def test_unset_rejects_assignment(state, streams):
    out, err = streams
    assert builtin_unset(state, ["unset", "A=b"], out, err) == 1
    assert err.getvalue() == "minishell: unset: not a valid identifier\n"


def test_pwd_prints_cwd(state, streams, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out, err = streams
    assert builtin_pwd(state, ["pwd"], out, err) == 0
    assert out.getvalue() == os.getcwd() + "\n"


def test_pwd_too_many(state, streams):
    out, err = streams
    assert builtin_pwd(state, ["pwd", "x"], out, err) == 1
    assert err.getvalue() == "pwd: too many arguments\n"


def test_cd_updates_pwd_and_oldpwd(state, streams, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    before = os.getcwd()
    (tmp_path / "sub").mkdir()
    out, err = streams
    assert builtin_cd(state, ["cd", "sub"], out, err) == 0
    assert state.env.get("OLDPWD") == before
    assert state.env.get("PWD") == os.getcwd()
    assert os.path.basename(os.getcwd()) == "sub"


def test_cd_home(state, streams, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    state.env.set("HOME", str(home))
    out, err = streams
    assert builtin_cd(state, ["cd"], out, err) == 0
    assert os.path.samefile(os.getcwd(), home)


def test_cd_home_not_set(streams, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    shell = ShellState(env=Environment([]))
    out, err = streams
    assert builtin_cd(shell, ["cd"], out, err) == 1
    assert err.getvalue() == "minishell: cd: HOME not set\n"


def test_cd_missing_directory(state, streams, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    before = os.getcwd()
    out, err = streams
    assert builtin_cd(state, ["cd", "missing"], out, err) == 1
    assert err.getvalue().startswith("minishell: cd: missing: ")
    assert os.getcwd() == before


def test_exit_without_argument(state, streams):
    out, err = streams
    with pytest.raises(ExitRequest) as info:
        builtin_exit(state, ["exit"], out, err)
    assert info.value.status == 0


def test_exit_after_signal(state, streams):
    state.signal = 2
    out, err = streams
    with pytest.raises(ExitRequest) as info:
        builtin_exit(state, ["exit"], out, err)
    assert info.value.status == 130


def test_exit_with_number(state, streams):
    out, err = streams
    with pytest.raises(ExitRequest) as info:
        builtin_exit(state, ["exit", "42"], out, err)
    assert info.value.status == 42


def test_exit_non_numeric(state, streams):
    out, err = streams
    with pytest.raises(ExitRequest) as info:
        builtin_exit(state, ["exit", "abc"], out, err)
    assert info.value.status == 255
    assert err.getvalue() == "minishell: exit: abc: numeric argument required\n"


def test_exit_overflow(state, streams):
    out, err = streams
    with pytest.raises(ExitRequest) as info:
        builtin_exit(state, ["exit", "99999999999"], out, err)
    assert info.value.status == 2


def test_exit_too_many_arguments(state, streams):
    out, err = streams
    assert builtin_exit(state, ["exit", "1", "2"], out, err) == 1
    assert err.getvalue() == "minishell: exit: too many arguments\n"


def test_run_builtin_dispatches_and_clears_signal(state, streams):
    state.signal = 2
    out, err = streams
    assert run_builtin(state, ["echo", "hi"], out, err) == 0
    assert out.getvalue() == "hi\n"
    assert state.signal == 0


def test_run_builtin_exit_clears_signal(state, streams):
    state.signal = 3
    out, err = streams
    with pytest.raises(ExitRequest) as info:
        run_builtin(state, ["exit"], out, err)
    assert info.value.status == 131
    assert state.signal == 0


def test_run_builtin_unknown(state, streams):
    out, err = streams
    assert run_builtin(state, ["ls"], out, err) == 1