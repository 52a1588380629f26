import io
import os

import pytest

from tinyshell.builtins import (
    ShellExit,
    ShellState,
    cd,
    check_valid_export,
    echo,
    exit_command,
    export,
    print_env,
    print_history,
    pwd,
    resolve_cd_path,
    unset,
)
from tinyshell.environment import Environment


def make_state(*entries):
    return ShellState(env=Environment(entries))


def run_echo(args):
    state = make_state()
    state.status = 5
    out = io.StringIO()
    echo(state, args, out)
    return out.getvalue(), state.status


@pytest.mark.parametrize(
    "args, expected",
    [
        (["echo"], "\n"),
        (["echo", "hello", "world"], "hello world\n"),
        (["echo", "-n", "hello"], "hello"),
        (["echo", "-n"], ""),
        (["echo", "-n", "-n", "x"], "x"),
        (["echo", "-nabc", "hi"], "hi"),
        (["echo", "a", "-n"], "a -n\n"),
    ],
)
def test_echo(args, expected):
    text, status = run_echo(args)
    assert text == expected
    assert status == 0


def test_check_valid_export():
    assert check_valid_export("NAME=value")
    assert check_valid_export("_a1=")
    assert not check_valid_export("1A=x")
    assert not check_valid_export("A-B=x")
    assert not check_valid_export("NOEQUALS")


def test_export_adds_and_replaces():
    state = make_state("A=1", "B=2")
    out, err = io.StringIO(), io.StringIO()
    export(state, ["export", "B=3", "C=4"], out, err)
    assert list(state.env) == ["A=1", "B=3", "C=4"]
    assert err.getvalue() == ""


def test_export_invalid_stops():
    state = make_state("A=1")
    out, err = io.StringIO(), io.StringIO()
    export(state, ["export", "X=1", "9bad=2", "Y=3"], out, err)
    assert err.getvalue() == "export: Bad Assignment!\n"
    assert list(state.env) == ["A=1", "X=1"]


def test_export_without_arguments_lists_sorted():
    state = make_state("b=2", "a=1", "C=3")
    out, err = io.StringIO(), io.StringIO()
    export(state, ["export"], out, err)
    lines = out.getvalue().splitlines()
    assert lines == sorted(["b=2", "a=1", "C=3"])
    assert list(state.env) == ["b=2", "a=1", "C=3"]


def test_unset_removes_named():
    state = make_state("A=1", "AB=2", "B=3")
    state.status = 7
    unset(state, ["unset", "A", "MISSING"])
    assert list(state.env) == ["AB=2", "B=3"]
    assert state.status == 0


def test_cd_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(tmp_path)
    start = os.getcwd()
    state = make_state(f"HOME={home}")
    out, err = io.StringIO(), io.StringIO()
    cd(state, ["cd"], out, err)
    assert os.path.samefile(os.getcwd(), home)
    assert state.status == 0
    assert state.oldpath == start
    assert state.env.getenv("OLDPWD") == start


def test_cd_tilde_subdir(tmp_path, monkeypatch):
    sub = tmp_path / "home" / "sub"
    sub.mkdir(parents=True)
    monkeypatch.chdir(tmp_path)
    start = os.getcwd()
    state = make_state(f"HOME={tmp_path / 'home'}")
    state.status = 4
    err = io.StringIO()
    cd(state, ["cd", "~/sub"], io.StringIO(), err)
    assert os.path.samefile(os.getcwd(), sub)
    assert state.status == 0
    assert state.oldpath == start
    assert state.env.getenv("OLDPWD") == start
    assert err.getvalue() == ""


def test_cd_missing_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    state = make_state()
    err = io.StringIO()
    cd(state, ["cd", str(tmp_path / "nope")], io.StringIO(), err)
    assert state.status == 1
    assert err.getvalue().startswith("Error:")
    assert os.path.samefile(os.getcwd(), tmp_path)


def test_cd_quoted_tilde_error(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    state = make_state()
    err = io.StringIO()
    cd(state, ["cd", "'~'"], io.StringIO(), err)
    assert err.getvalue() == "cd: ~: No such file or directory\n"
    assert state.status == 1


def test_cd_dash_goes_back(tmp_path, monkeypatch):
    other = tmp_path / "other"
    other.mkdir()
    monkeypatch.chdir(tmp_path)
    state = make_state("OLDPWD=x")
    state.oldpath = str(other)
    out = io.StringIO()
    cd(state, ["cd", "-"], out, io.StringIO())
    assert out.getvalue() == f"{other}\n"
    assert os.path.samefile(os.getcwd(), other)
    assert state.oldpwd_off is False


def test_resolve_dash_without_oldpwd():
    state = make_state()
    state.oldpath = "/somewhere"
    err = io.StringIO()
    assert resolve_cd_path(state, ["cd", "-"], io.StringIO(), err) is None
    assert err.getvalue() == "cd: OLDPWD not set\n"
    assert state.status == 1


def test_resolve_dash_without_oldpath():
    state = make_state("OLDPWD=/x")
    assert resolve_cd_path(state, ["cd", "-"], io.StringIO(), io.StringIO()) is None
    assert state.status == 1


def test_resolve_plain_path_strips_quotes():
    state = make_state()
    path = resolve_cd_path(state, ["cd", '"dir"'], io.StringIO(), io.StringIO())
    assert path == "dir"


def test_pwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    state = make_state()
    out = io.StringIO()
    pwd(state, out)
    assert out.getvalue() == f"{os.getcwd()}\n"
    assert state.status == 0


def test_exit_without_argument():
    state = make_state()
    state.status = 3
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        exit_command(state, ["exit"], out)
    assert info.value.code == 3
    assert out.getvalue() == "exit\n"


def test_exit_numeric():
    state = make_state()
    with pytest.raises(ShellExit) as info:
        exit_command(state, ["exit", "42"], io.StringIO())
    assert info.value.code == 42


def test_exit_non_numeric():
    state = make_state()
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        exit_command(state, ["exit", "abc"], out)
    assert info.value.code == 2
    assert "minishell: exit: abc: numeric argument required\n" in out.getvalue()


def test_exit_too_many_arguments():
    state = make_state()
    out = io.StringIO()
    exit_command(state, ["exit", "1", "2"], out)
    assert state.status == 256
    assert out.getvalue() == "exit\nminishell: exit: too many arguments\n"


def test_print_history():
    state = make_state()
    state.history = ["ls", "pwd"]
    out = io.StringIO()
    print_history(state, out)
    assert out.getvalue() == "1 ls\n2 pwd\n"
    assert state.status == 0


def test_print_history_empty():
    state = make_state()
    out = io.StringIO()
    print_history(state, out)
    assert out.getvalue() == ""
    assert state.status == 1


def test_print_env():
    state = make_state("A=1", "B=2")
    state.status = 9
    out = io.StringIO()
    print_env(state, out)
    assert out.getvalue() == "A=1\nB=2\n"
    assert state.status == 0