import pytest

from slstatus.memory import (
    parse_meminfo,
    ram_free,
    ram_perc,
    ram_total,
    ram_used,
    swap_free,
    swap_perc,
    swap_total,
    swap_used,
)
from slstatus.util import fmt_human

SAMPLE = """\
MemTotal:        1000 kB
MemFree:          200 kB
MemAvailable:     600 kB
Buffers:          100 kB
Cached:           200 kB
SwapCached:        10 kB
SwapTotal:        400 kB
SwapFree:         290 kB
HugePages_Total:    0
"""


@pytest.fixture
def meminfo(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text(SAMPLE)
    return path


def test_parse_meminfo():
    fields = parse_meminfo(SAMPLE)
    assert fields["MemTotal"] == 1000
    assert fields["SwapCached"] == 10
    assert fields["HugePages_Total"] == 0
    assert "garbage" not in parse_meminfo("garbage\nNope: x kB\n")


def test_ram_total_and_free(meminfo):
    assert ram_total(None, meminfo) == fmt_human(1000 * 1024, 1024)
    assert ram_free(None, meminfo) == fmt_human(600 * 1024, 1024)


def test_ram_used(meminfo):
    assert ram_used(None, meminfo) == fmt_human((1000 - 200 - 100 - 200) * 1024, 1024)


def test_ram_perc(meminfo):
    assert ram_perc(None, meminfo) == "50"


def test_swap_values(meminfo):
    assert swap_total(None, meminfo) == fmt_human(400 * 1024, 1024)
    assert swap_free(None, meminfo) == fmt_human(290 * 1024, 1024)
    assert swap_used(None, meminfo) == fmt_human((400 - 290 - 10) * 1024, 1024)


def test_swap_perc(meminfo):
    assert swap_perc(None, meminfo) == "25"


def test_swap_perc_without_swap(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("SwapCached: 0 kB\nSwapTotal: 0 kB\nSwapFree: 0 kB\n")
    assert swap_perc(None, path) is None


def test_missing_file(tmp_path):
    missing = tmp_path / "absent"
    assert ram_total(None, missing) is None
    assert swap_used(None, missing) is None


def test_missing_fields(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("MemTotal: 10 kB\n")
    assert ram_perc(None, path) is None
    assert swap_free(None, path) is None