import pytest

from slstatus.util import (
    MAX_LINE,
    StatusError,
    die,
    fmt_human,
    read_line,
    read_uint,
    warn,
)


def test_warn_plain_message(capsys):
    warn("something happened")
    assert capsys.readouterr().err == "something happened\n"


def test_warn_with_error_appends_description(capsys):
    warn("fopen 'x'", FileNotFoundError(2, "No such file or directory"))
    assert capsys.readouterr().err == "fopen 'x': No such file or directory\n"


def test_die_exits_with_status_one(capsys):
    with pytest.raises(SystemExit) as info:
        die("fatal")
    assert info.value.code == 1
    assert "fatal" in capsys.readouterr().err


def test_fmt_human_below_base_has_empty_prefix():
    assert fmt_human(0, 1024) == "0.0 "


@pytest.mark.parametrize("base", [1000, 1024])
def test_fmt_human_exact_powers(base):
    prefixes = ["", "k", "M", "G"] if base == 1000 else ["", "Ki", "Mi", "Gi"]
    for power, prefix in enumerate(prefixes):
        assert fmt_human(base**power, base) == f"1.0 {prefix}"


def test_fmt_human_fraction():
    assert fmt_human(1536, 1024) == "1.5 Ki"


def test_fmt_human_stops_at_largest_prefix():
    assert fmt_human(1000**10, 1000).endswith(" Y")


def test_fmt_human_rejects_other_bases():
    with pytest.raises(ValueError):
        fmt_human(10, 10)


def test_read_line_strips_newline(tmp_path):
    path = tmp_path / "f"
    path.write_text("first\nsecond\n")
    assert read_line(path) == "first"


def test_read_line_limits_length(tmp_path):
    path = tmp_path / "f"
    path.write_text("a" * 5000)
    assert len(read_line(path)) == MAX_LINE


def test_read_line_missing_file(tmp_path, capsys):
    with pytest.raises(StatusError):
        read_line(tmp_path / "missing")
    assert "fopen" in capsys.readouterr().err


def test_read_uint_parses_leading_number(tmp_path):
    path = tmp_path / "n"
    path.write_text("  4096 kB\n")
    assert read_uint(path) == 4096


def test_read_uint_rejects_text(tmp_path):
    path = tmp_path / "n"
    path.write_text("none\n")
    with pytest.raises(StatusError):
        read_uint(path)