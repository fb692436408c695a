import pytest

from slstatus.battery import (
    STATE_SYMBOLS,
    battery_perc,
    battery_remaining,
    battery_state,
)


@pytest.fixture
def battery(tmp_path):
    directory = tmp_path / "BAT0"
    directory.mkdir()

    def write(name, value):
        (directory / name).write_text(value)

    return write


def test_perc_reads_capacity(tmp_path, battery):
    battery("capacity", "87\n")
    assert battery_perc("BAT0", tmp_path) == "87"


def test_perc_missing_battery(tmp_path):
    assert battery_perc("BAT9", tmp_path) is None


def test_perc_garbage(tmp_path, battery):
    battery("capacity", "full\n")
    assert battery_perc("BAT0", tmp_path) is None


@pytest.mark.parametrize("state", ["Charging", "Discharging", "Full", "Not charging"])
def test_state_known(tmp_path, battery, state):
    battery("status", state + "\n")
    assert battery_state("BAT0", tmp_path) == STATE_SYMBOLS[state]


def test_state_unknown(tmp_path, battery):
    battery("status", "Unknown\n")
    assert battery_state("BAT0", tmp_path) == "?"


def test_state_missing(tmp_path):
    assert battery_state("BAT0", tmp_path) is None


def test_remaining_discharging(tmp_path, battery):
    battery("status", "Discharging\n")
    battery("charge_now", "5000000\n")
    battery("current_now", "2000000\n")
    assert battery_remaining("BAT0", tmp_path) == "2h 30m"


def test_remaining_uses_energy_and_power(tmp_path, battery):
    battery("status", "Discharging\n")
    battery("energy_now", "3000\n")
    battery("power_now", "1000\n")
    assert battery_remaining("BAT0", tmp_path) == "3h 0m"


def test_remaining_while_charging_is_empty(tmp_path, battery):
    battery("status", "Charging\n")
    battery("charge_now", "100\n")
    assert battery_remaining("BAT0", tmp_path) == ""


def test_remaining_zero_current(tmp_path, battery):
    battery("status", "Discharging\n")
    battery("charge_now", "100\n")
    battery("current_now", "0\n")
    assert battery_remaining("BAT0", tmp_path) is None


def test_remaining_without_charge_file(tmp_path, battery):
    battery("status", "Discharging\n")
    assert battery_remaining("BAT0", tmp_path) is None