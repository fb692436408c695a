import os
import pwd
import subprocess
from unittest import mock

from slstatus.misc import (
    UNKNOWN_STR,
    format_uptime,
    gid,
    pamixer_status,
    run_command,
    temp,
    uid,
    uptime,
    username,
    volume_icon,
)


def _completed(stdout):
    return subprocess.CompletedProcess(args=[], returncode=0, stdout=stdout, stderr="")


def test_run_command_first_line():
    assert run_command("echo foo") == "foo"
    assert run_command("printf 'first\\nsecond\\n'") == "first"


def test_run_command_empty_output():
    assert run_command("printf ''") is None


def test_temp_reads_millidegrees(tmp_path):
    sensor = tmp_path / "temp1_input"
    sensor.write_text("45000\n")
    assert temp(sensor) == "45"


def test_temp_missing(tmp_path):
    assert temp(tmp_path / "absent") is None


def test_format_uptime():
    assert format_uptime(2 * 3600 + 5 * 60 + 30) == "2h 5m"
    assert format_uptime(59) == "0h 0m"


def test_uptime_shape():
    hours, minutes = uptime().split(" ")
    assert hours.endswith("h")
    assert minutes.endswith("m")
    assert int(hours[:-1]) >= 0
    assert 0 <= int(minutes[:-1]) < 60


def test_identity():
    assert uid() == str(os.geteuid())
    assert gid() == str(os.getgid())
    assert username() == pwd.getpwuid(os.geteuid()).pw_name


def test_volume_icon_thresholds():
    assert volume_icon(90, True) == "󰖁"
    assert volume_icon(33, False) == "󰕿"
    assert volume_icon(34, False) == "󰖀"
    assert volume_icon(66, False) == "󰖀"
    assert volume_icon(67, False) == "󰕾"


@mock.patch("slstatus.misc.subprocess.run")
def test_pamixer_muted(run):
    run.side_effect = [_completed("true\n"), _completed("40\n")]
    assert pamixer_status() == "󰖁 40%"


@mock.patch("slstatus.misc.subprocess.run")
def test_pamixer_unmuted(run):
    run.side_effect = [_completed("false\n"), _completed("80\n")]
    assert pamixer_status() == f"{volume_icon(80, False)} 80%"


@mock.patch("slstatus.misc.subprocess.run", side_effect=FileNotFoundError("pamixer"))
def test_pamixer_missing(_run):
    assert pamixer_status() == UNKNOWN_STR


@mock.patch("slstatus.misc.subprocess.run")
def test_pamixer_no_volume(run):
    run.side_effect = [_completed("false\n"), _completed("")]
    assert pamixer_status() == UNKNOWN_STR