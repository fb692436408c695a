import struct
from unittest import mock

import pytest

from slstatus import volume
from slstatus.volume import SOUND_MIXER_READ_DEVMASK, mixer_read_request, vol_perc


def test_mixer_read_request_for_volume_channel():
    assert mixer_read_request(0) == 0x80044D00


@pytest.mark.parametrize("channel", [1, 4, 24])
def test_mixer_read_request_encodes_channel(channel):
    assert mixer_read_request(channel) - mixer_read_request(0) == channel


def test_devmask_request_uses_devmask_channel():
    assert SOUND_MIXER_READ_DEVMASK == mixer_read_request(volume.SOUND_MIXER_DEVMASK)


def test_missing_device(tmp_path):
    assert vol_perc(tmp_path / "mixer") is None


def test_regular_file_is_not_a_mixer(tmp_path):
    device = tmp_path / "mixer"
    device.write_bytes(b"")
    assert vol_perc(device) is None


def _fake_ioctl(devmask, level):
    def fake(fd, request, arg):
        if request == SOUND_MIXER_READ_DEVMASK:
            return struct.pack("i", devmask)
        if request == mixer_read_request(0):
            return struct.pack("i", level)
        raise OSError(25, "Inappropriate ioctl for device")

    return fake


def test_reads_left_channel(tmp_path):
    device = tmp_path / "mixer"
    device.write_bytes(b"")
    with mock.patch("fcntl.ioctl", side_effect=_fake_ioctl(0b1, (40 << 8) | 55)):
        assert vol_perc(device) == "55"


def test_without_volume_channel(tmp_path):
    device = tmp_path / "mixer"
    device.write_bytes(b"")
    with mock.patch("fcntl.ioctl", side_effect=_fake_ioctl(0b10, 55)):
        assert vol_perc(device) is None


def test_failed_channel_read(tmp_path):
    device = tmp_path / "mixer"
    device.write_bytes(b"")

    def fake(fd, request, arg):
        if request == SOUND_MIXER_READ_DEVMASK:
            return struct.pack("i", 1)
        raise OSError(5, "Input/output error")

    with mock.patch("fcntl.ioctl", side_effect=fake):
        assert vol_perc(device) is None