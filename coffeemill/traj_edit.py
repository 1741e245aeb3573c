"""Trajectory commands that copy frames between files: convert, extract, join and split."""

from __future__ import annotations

import logging
import re
from collections import deque
from typing import Any, Iterable

from coffeemill.attribute import Attribute
from coffeemill.formats import (
    base_name_of,
    extension_of,
    is_writable_extension,
    reader,
    writer,
)
from coffeemill.trajectory import Trajectory
from coffeemill.trajio import TrajectoryFormatError

try:
    import tomllib
except ModuleNotFoundError:  # Python 3.10
    tomllib = None

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_count(text: str) -> int | None:
    """Parse a leading non-negative integer, ignoring trailing text; ``None`` on failure."""
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    value = int(match.group(1))
    return value if value >= 0 else None


def _load_toml(path: str) -> dict[str, Any]:
    if tomllib is None:
        raise RuntimeError("reading TOML input requires Python 3.11 or newer")
    with open(path, "rb") as stream:
        return tomllib.load(stream)


def convert_usage() -> str:
    return (
        "usage: mill traj convert [trajfile] [format] <reference>_opt\n"
        "       convert format from [trajfile] to [format].\n"
        "       Only the first frame in a reference file is used to merge information.\n"
    )


def mode_traj_convert(args: Iterable[str]) -> int:
    """Convert a trajectory to another format, optionally taking attributes from a reference."""
    args = deque(args)
    if not args:
        logger.error("mill traj convert: too few arguments")
        logger.error(convert_usage())
        return 1

    source = args.popleft()
    if source == "help":
        logger.info(convert_usage())
        return 0
    if not args:
        logger.error("mill traj convert: too few arguments")
        logger.error(convert_usage())
        return 1

    fmt = args[0]
    output = f"{source}_converted.{fmt}"
    logger.debug("output file is %s", output)
    if not is_writable_extension(extension_of(output)):
        raise TrajectoryFormatError(f"format {fmt} is not supported")
    args.popleft()

    ref_header: dict[str, Attribute] | None = None
    ref_frame = None
    if args:
        logger.debug("reference file is %s", args[0])
        with reader(args[0]) as ref:
            ref_header = ref.read_header()
            ref_frame = ref.read_frame()

    with reader(source) as r, writer(output) as w:
        header = r.read_header()
        if ref_header:
            for name, value in ref_header.items():
                header.setdefault(name, value)
        w.write_header(header)

        for frame in r:
            if ref_frame is not None:
                if len(ref_frame) != len(frame):
                    logger.warning(
                        'number of particles in the reference file "%s" (%d) differs '
                        'from the original "%s" (%d). Skipping.',
                        args[0], len(ref_frame), source, len(frame),
                    )
                else:
                    for particle, ref_particle in zip(frame, ref_frame):
                        particle.attributes = {
                            name: Attribute(value)
                            for name, value in ref_particle.attributes.items()
                        }
            w.write_frame(frame)
    return 0


def extract_usage() -> str:
    return (
        "usage: mill traj extract [trajfile] [start: size_t] [stop: size_t]\n"
        "       The last snapshot will be included.\n"
        "       The index starts from 0. The initial frame is 0-th frame.\n"
    )


def mode_traj_extract(args: Iterable[str]) -> int:
    """Write the frames ``start`` to ``stop`` (both included) to a new file."""
    args = deque(args)
    if not args:
        logger.error("mill traj mode: too few arguments.")
        logger.error(extract_usage())
        return 1

    fname = args[0]
    if fname == "help":
        logger.info(extract_usage())
        return 0
    if len(args) < 3:
        logger.error("mill traj mode: too few arguments.")
        logger.error(extract_usage())
        return 1

    bounds = []
    for text in (args[1], args[2]):
        value = _parse_count(text)
        if value is None:
            logger.error("integer parsing failed: %s", text)
            logger.error(extract_usage())
            return 1
        bounds.append(value)
    beg, end = bounds

    outname = f"{base_name_of(fname)}_{beg}to{end}{extension_of(fname)}"
    if beg > end:
        logger.error("mill traj extract: begin(%d) > end (%d)", beg, end)
        logger.error(extract_usage())
        return 1

    num = end - beg + 1
    with reader(fname) as r:
        traj = Trajectory(attributes=r.read_header())
        if "nset" in traj.attributes:
            traj["nset"] = num
        for index in range(end + 1):
            frame = r.read_frame()
            if frame is None:
                raise TrajectoryFormatError(
                    f"{fname}: {index}-th snapshot does not exist"
                )
            if index >= beg:
                traj.snapshots.append(frame)

    with writer(outname) as w:
        w.write(traj)
    return 0


def join_usage() -> str:
    return (
        "usage: mill traj join [parameters...]\n"
        "     - mill traj join traj1.dcd traj2.dcd traj3.dcd\n"
        "       concatenates dcd files and write traj1_joined.dcd\n"
        "     - mill traj join input.toml\n"
        "       specify input, output, and format via TOML file.\n"
        "```toml\n"
        "inputs = [\n"
        '  "data/traj1.dcd",\n'
        '  "data/traj2.dcd",\n'
        "]\n"
        'output = "data/traj.dcd"\n'
        "# When you re-start a simulation from the last snapshot of a traj file, the\n"
        "# next traj file would start with the snapshot and it causes redundancy.\n"
        "# If you want to remove the initial frame from a traj file that would be joined,\n"
        "# set `include_initial = false`.\n"
        "include_initial = true # by default, true\n"
        "```\n"
    )


def _join_settings(path: str) -> tuple[list[str], str, bool]:
    data = _load_toml(path)
    output = data.get("output")
    if not isinstance(output, str):
        raise ValueError(f"{path}: 'output' must be a string")
    inputs = data.get("inputs")
    if not isinstance(inputs, list) or not all(isinstance(item, str) for item in inputs):
        raise ValueError(f"{path}: 'inputs' must be an array of strings")
    include_initial = data.get("include_initial", True)
    if not isinstance(include_initial, bool):
        raise ValueError(f"{path}: 'include_initial' must be a boolean")
    return inputs, output, include_initial


def mode_traj_join(args: Iterable[str]) -> int:
    """Concatenate several trajectory files into one."""
    args = deque(args)
    if not args:
        logger.error("mill traj join: too few arguments")
        logger.error(join_usage())
        return 1

    first = args.popleft()
    if first == "help":
        logger.info(join_usage())
        return 0

    if extension_of(first) == ".toml":
        files, output, include_initial = _join_settings(first)
    else:
        output = f"{base_name_of(first)}_joined{extension_of(first)}"
        files = [first, *args]
        include_initial = True

    if not files:
        raise ValueError("mill traj join: no input files given")

    with reader(files[0]) as head:
        header = head.read_header()

    with writer(output) as w:
        w.write_header(header)
        for file in files:
            with reader(file) as r:
                for index, frame in enumerate(r):
                    if index > 0 or include_initial:
                        w.write_frame(frame)
    return 0


def split_usage() -> str:
    return (
        "usage: mill dcd split [parameters...]\n\n"
        "     - mill dcd split traj.dcd 100 --skip-initial\n"
        "       It splits traj.dcd for every 100 snapshot.\n"
        "       first contains [0, 99], 2nd [100, 199], ...\n"
        "         If the total number of frams contained is not a multiple of 100,\n"
        "       the last snapshot will contain too few frames.\n"
        "       You can also skip the initial frame by adding --skip-initial.\n"
    )


def _pop_flag(args: deque[str], name: str) -> bool:
    flag = f"--{name}"
    if flag in args:
        args.remove(flag)
        return True
    return False


def mode_traj_split(args: Iterable[str]) -> int:
    """Split a trajectory into files of a fixed number of frames."""
    args = deque(args)
    skip_initial = _pop_flag(args, "skip-initial")
    logger.debug("skip_initial = %s", skip_initial)

    if not args:
        logger.error("mill traj split: too few arguments")
        logger.error(split_usage())
        return 1

    fname = args.popleft()
    if fname == "help":
        logger.info(split_usage())
        return 0

    unit = _parse_count(args[0]) if args else None
    if unit is None or unit == 0:
        logger.error(
            "mill dcd split: invalid argument: %s is not a positive integer.",
            args[0] if args else "",
        )
        logger.error(split_usage())
        return 1

    with reader(fname) as r:
        traj = Trajectory(attributes=r.read_header())
        traj["nset"] = unit

        if skip_initial:
            r.read_frame()

        index = 0
        next_exists = True
        while next_exists:
            outname = f"{base_name_of(fname)}_{index}{extension_of(fname)}"
            with writer(outname) as w:
                w.write_header(traj.attributes)
                for _ in range(unit):
                    frame = r.read_frame()
                    if frame is None:
                        break
                    w.write_frame(frame)
            index += 1
            next_exists = not r.is_eof()
    return 0