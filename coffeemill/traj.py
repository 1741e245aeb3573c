"""The ``traj`` command: dispatches to the trajectory subcommands."""

from __future__ import annotations

import logging
import sys
from collections import deque
from typing import Iterable

from coffeemill.traj_edit import (
    mode_traj_convert,
    mode_traj_extract,
    mode_traj_join,
    mode_traj_split,
)
from coffeemill.traj_projection import mode_traj_projection
from coffeemill.traj_transform import (
    mode_traj_rotate,
    mode_traj_running_average,
    mode_traj_translate,
)
from coffeemill.trajio import TrajectoryFormatError

logger = logging.getLogger(__name__)


def traj_usage() -> str:
    return (
        "usage: mill traj [command] [parameters...]\n\n"
        "    avaiable commands\n"
        "    - convert\n"
        "      : convert file format\n"
        "    - extract\n"
        "      : extract a part of trajectory\n"
        "    - join\n"
        "      : concatenate several traj files\n"
        "    - split\n"
        "      : split traj files into several fragments\n"
        "    - impose\n"
        "      : superimpose all the frames onto the initial frame\n"
        "    - rotate\n"
        "      : rotate molecules around an axis by a specified angle\n"
        "    - translate\n"
        "      : move molecules by a specified distance\n"
        "    - running_average\n"
        "      : takes a running average of position by a specified window size\n"
        "    - projection\n"
        "      : projects trajectory along axes\n"
        "    - help\n"
        "      : prints detailed explanation of each command\n"
    )


_HELPED = {
    "convert": mode_traj_convert,
    "extract": mode_traj_extract,
    "join": mode_traj_join,
    "split": mode_traj_split,
    "translate": mode_traj_translate,
    "rotate": mode_traj_rotate,
    "running_average": mode_traj_running_average,
    "projection": mode_traj_projection,
}

_COMMANDS = {
    **_HELPED,
    "running-average": mode_traj_running_average,
}


def mode_traj_help(args: Iterable[str]) -> int:
    """Print the usage of ``traj`` or of one of its commands."""
    args = deque(args)
    if not args:
        logger.info(traj_usage())
        return 0
    command = args[0]
    if command == "help":
        logger.info(traj_usage())
        return 0
    handler = _HELPED.get(command)
    if handler is None:
        logger.error("mill traj help: unknown command : %s", command)
        logger.error(traj_usage())
        return 1
    return handler(["help"])


def mode_traj(args: Iterable[str]) -> int:
    """Run the trajectory command named by the first argument."""
    args = deque(args)
    if not args:
        logger.error("mill traj mode: too few arguments")
        mode_traj_help([])
        return 1

    command = args.popleft()
    if command == "help":
        return mode_traj_help(args)
    handler = _COMMANDS.get(command)
    if handler is None:
        logger.error("mill traj mode: unknown command: %s", command)
        logger.error(traj_usage())
        return 1
    return handler(args)


def main(argv: list[str] | None = None) -> int:
    """Entry point of the ``traj`` command."""
    if argv is None:
        argv = sys.argv[1:]
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        return mode_traj(argv)
    except (TrajectoryFormatError, ValueError, OSError) as error:
        logger.error("%s", error)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())