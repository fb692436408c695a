# slstatus

A small status monitor for Linux. At a fixed interval it collects
system information (wifi signal and network name, volume, CPU and
memory usage, battery state, date and time) and joins it into one
status line. The line becomes the name of the X root window, where a
window manager's bar can show it. It can also be printed to standard
output.

## Installation

```
pip install .
```

To also install what the test suite needs:

```
pip install ".[test]"
```

## Usage

```
slstatus [-v] [-s] [-1]
```

- `-v` prints the version to standard error and exits with status 1.
- `-s` writes each status line to standard output instead of setting
  the root window's name.
- `-1` writes a single status line to standard output and exits. It
  implies `-s`.

Any other flag, or any extra argument, prints the usage line and exits
with status 1. Without `-s` or `-1` the program connects to the X server
named by `DISPLAY`, using a cookie from `XAUTHORITY` or
`~/.Xauthority` if there is one. It exits if no connection can be made.
When it stops, it clears the root window's name.

SIGINT and SIGTERM stop the loop. SIGUSR1 wakes the loop early and
forces an update.

The default line shows, in this order: wifi signal icon and ESSID of
`wlp0s20f3`, the pamixer volume, CPU usage, RAM usage, the state and
charge of battery `BAT1`, and the date as `%m/%d %H:%M`. Updates come
every 1000 ms. The line is at most 2047 bytes long.

## Components

Each component is a function that takes one argument, usually an
interface, a path or a format string, and returns a string. It returns
`None` when no value can be read. In that case the status line shows
`n/a` at that place.

| Module              | Functions |
|---------------------|-----------|
| `slstatus.battery`  | `battery_perc`, `battery_state`, `battery_remaining` |
| `slstatus.cpu`      | `cpu_freq`, `cpu_perc`, `CpuUsage` |
| `slstatus.system`   | `cat`, `datetime`, `disk_free`, `disk_perc`, `disk_total`, `disk_used`, `entropy`, `hostname`, `kernel_release`, `load_avg`, `num_files` |
| `slstatus.network`  | `ipv4`, `ipv6`, `up`, `netspeed_rx`, `netspeed_tx`, `NetSpeed` |
| `slstatus.memory`   | `ram_free`, `ram_perc`, `ram_total`, `ram_used`, `swap_free`, `swap_perc`, `swap_total`, `swap_used`, `parse_meminfo` |
| `slstatus.misc`     | `run_command`, `temp`, `uptime`, `format_uptime`, `gid`, `uid`, `username`, `pamixer_status`, `volume_icon` |
| `slstatus.volume`   | `vol_perc` (OSS mixer device), `mixer_read_request` |
| `slstatus.wifi`     | `wifi_essid`, `wifi_perc`, `Nl80211`, `find_attr`, `rssi_to_perc`, `signal_icon` |
| `slstatus.keyboard` | `valid_layout_or_variant`, `get_layout`, `format_indicators` |

Some components keep state between calls. `cpu_perc` (`CpuUsage`) and
`netspeed_rx` / `netspeed_tx` (`NetSpeed`) report the change since the
previous call, so their first call returns `None`.

`pamixer_status` runs the `pamixer` command and `run_command` runs a
shell command. Both use only the first line of output.

## Building your own status line

The status line is a list of `Arg` entries. Each entry names a
component, a format and an argument. `default_args()` returns the
default layout. In a format, `%s` stands for the component's value and
`%%` for a literal percent sign. No other conversions are supported.

```python
import sys

from slstatus.cpu import cpu_perc
from slstatus.status import Arg, build_status, run
from slstatus.system import datetime

args = [
    Arg(cpu_perc, "cpu %s%% | ", None),
    Arg(datetime, "%s", "%F %T"),
]

print(build_status(args, "n/a", 2048))

# Print one line and stop.
run(args, 1000, True, sys.stdout)
```

`parse_args(argv)` turns the command-line flags into an `Options`
value with `to_stdout` and `once`. `main(argv=None)` is the command's
entry point.

Helpers in `slstatus.util`:

- `fmt_human` formats numbers with decimal (base 1000) or binary
  (base 1024) prefixes, for example `1.5 Ki`.
- `read_line` and `read_uint` read values from files under `/proc` and
  `/sys`. They raise `StatusError` when a file cannot be read.
- `warn` and `die` print diagnostics to standard error. `die` then
  exits with status 1.

## What it does not do

- It does not read the keyboard layout or the caps lock and num lock
  state from the X server. `slstatus.keyboard` only holds the pure
  parts: `get_layout` picks a layout name out of an xkb symbols string,
  and `format_indicators` renders a LED mask that you supply.
- Readings come from Linux interfaces (`/proc`, `/sys`, nl80211
  netlink, OSS ioctls). Other systems are not supported.
- There is no configuration file. To change the line, build your own
  list of `Arg` entries and pass it to `run` or `build_status`.