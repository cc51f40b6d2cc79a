"""
asdbctl command-line interface.

Get or set the brightness of Apple Studio Displays.  Launches the Qt
window when no command is given.

Usage::

    asdbctl get
    asdbctl set 60
    asdbctl -s SERIAL up --step 5
    asdbctl down
    asdbctl            # GUI
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .__version__ import __version__
from .constants import DEFAULT_STEP
from .coordinator import DisplayCoordinator
from .device_base import BrightnessError

log = logging.getLogger(__name__)


def _percent(value: str) -> int:
    return _bounded_int(value, 0, 100)


def _step(value: str) -> int:
    return _bounded_int(value, 1, 100)


def _bounded_int(value: str, low: int, high: int) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if not low <= number <= high:
        raise argparse.ArgumentTypeError(f"{number} is not in {low}..{high}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asdbctl",
        description="Tool to get or set the brightness for Apple Studio Displays. "
                    "Launches UI if no command is given.",
    )
    parser.add_argument("--version", action="version", version=f"asdbctl {__version__}")
    parser.add_argument("-s", "--serial", metavar="SERIAL",
                        help="Serial number of the display for which to adjust the brightness")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Turn debugging information on")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("get", help="Get the current brightness in %%")

    set_p = sub.add_parser("set", help="Set the current brightness in %%")
    set_p.add_argument("brightness", type=_percent, metavar="BRIGHTNESS",
                       help="Brightness percentage")

    for name, text in (("up", "Increase the brightness"), ("down", "Decrease the brightness")):
        p = sub.add_parser(name, help=text)
        p.add_argument("-s", "--step", type=_step, default=DEFAULT_STEP,
                       help="Step size in percent")
    return parser


def setup_logging(verbosity: int) -> None:
    """Configure stderr logging: -v for info, -vv for debug."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


class BrightnessCommands:
    """One-shot commands applied to every selected display in turn."""

    def __init__(self, coordinator: DisplayCoordinator):
        self.coordinator = coordinator

    def get(self) -> int:
        for state in self.coordinator.states:
            percent = self.coordinator.get(state.index)
            print(f"brightness {percent}")
        return 0

    def set(self, percent: int) -> int:
        for state in self.coordinator.states:
            self.coordinator.set_one(state.index, percent)
        return 0

    def up(self, step: int) -> int:
        for state in self.coordinator.states:
            self.coordinator.adjust(state.index, step)
        return 0

    def down(self, step: int) -> int:
        for state in self.coordinator.states:
            self.coordinator.adjust(state.index, -step)
        return 0


def run_command(args: argparse.Namespace) -> int:
    with DisplayCoordinator.from_discovery(serial=args.serial, hydrate=False) as coordinator:
        commands = BrightnessCommands(coordinator)
        if args.command == "get":
            return commands.get()
        if args.command == "set":
            return commands.set(args.brightness)
        if args.command == "up":
            return commands.up(args.step)
        if args.command == "down":
            return commands.down(args.step)
    raise ValueError(f"Unknown command: {args.command!r}")


def gui(serial: Optional[str] = None) -> int:
    from .qt_app import launch_gui
    return launch_gui(serial)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.command is None:
            return gui(args.serial)
        return run_command(args)
    except BrightnessError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
