"""Trajectory commands that move particles: translate, rotate and running average."""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import Any, Iterable

import numpy as np

from coffeemill.formats import base_name_of, extension_of, reader, writer

logger = logging.getLogger(__name__)


def _pop_option(args: deque[str], name: str) -> str | None:
    """Remove a ``--name=value`` argument from ``args`` and return its value."""
    prefix = f"--{name}="
    for item in list(args):
        if item.startswith(prefix):
            args.remove(item)
            return item[len(prefix):]
    return None


def translate_usage() -> str:
    return (
        "usage: mill traj translate [trajfile] [x y z]\n"
        "       translate the snapshot by a specified vector.\n"
    )


def mode_traj_translate(args: Iterable[str]) -> int:
    """Move every particle of every frame by a fixed vector."""
    args = deque(args)
    if not args:
        logger.error("mill traj translate: too few arguments")
        logger.error(translate_usage())
        return 1

    source = args.popleft()
    if source == "help":
        logger.info(translate_usage())
        return 0
    if len(args) != 3:
        logger.error("mill traj translate: too few arguments")
        logger.error(translate_usage())
        return 1

    x, y, z = (float(value) for value in args)
    dr = np.array([x, y, z])
    output = (
        f"{base_name_of(source)}_translated_{x:f}_{y:f}_{z:f}{extension_of(source)}"
    )

    with reader(source) as r, writer(output) as w:
        w.write_header(r.read_header())
        for frame in r:
            for particle in frame:
                particle.position = particle.position + dr
            w.write_frame(frame)
    return 0


def rotate_usage() -> str:
    return (
        "usage: mill traj rotate [trajfile] [x|y|z] [angle(degree)]\n"
        "       rotate the snapshot around x, y, or z axis by a specified angle.\n"
        "     - mill traj rotate [trajfile] [vec x y z] [angle(degree)]\n"
        "       rotate the snapshot around the axis\n"
    )


def rotation_matrix(axis: Any, degrees: float) -> np.ndarray:
    """Return the 3x3 rotation by ``degrees`` around ``"x"``, ``"y"``, ``"z"``
    or a given direction vector (used as given, not normalised)."""
    theta = float(degrees) * math.pi / 180.0
    c, s = math.cos(theta), math.sin(theta)
    if isinstance(axis, str):
        if axis == "x":
            return np.array([[1.0, 0.0, 0.0], [0.0, c, -s], [0.0, s, c]])
        if axis == "y":
            return np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])
        if axis == "z":
            return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        raise ValueError(f"unknown axis: {axis!r}")

    n = np.asarray(axis, dtype=float)
    if n.shape != (3,):
        raise ValueError(f"rotation axis must be a 3D vector, got shape {n.shape}")
    cross = np.array([
        [0.0, -n[2], n[1]],
        [n[2], 0.0, -n[0]],
        [-n[1], n[0], 0.0],
    ])
    return (1.0 - c) * np.outer(n, n) + c * np.eye(3) + s * cross


def mode_traj_rotate(args: Iterable[str]) -> int:
    """Rotate every frame around its centroid."""
    args = deque(args)
    if not args:
        logger.error("mill traj rotate: too few arguments")
        logger.error(rotate_usage())
        return 1

    source = args.popleft()
    if source == "help":
        logger.info(rotate_usage())
        return 0

    axis = args[0] if args else ""
    expected = 5 if axis == "vec" else 2
    if len(args) != expected:
        logger.error("mill traj rotate: too few arguments")
        logger.error(rotate_usage())
        return 1

    angle = args[-1]
    if axis == "vec":
        direction = [float(value) for value in list(args)[1:4]]
        rot = rotation_matrix(direction, float(angle))
    elif axis in ("x", "y", "z"):
        rot = rotation_matrix(axis, float(angle))
    else:
        logger.error("unknown axis: %s", axis)
        logger.error(rotate_usage())
        return 1

    output = f"{base_name_of(source)}_rotated_{axis}{angle}{extension_of(source)}"

    with reader(source) as r, writer(output) as w:
        w.write_header(r.read_header())
        for frame in r:
            if len(frame):
                center = np.mean([particle.position for particle in frame], axis=0)
                for particle in frame:
                    particle.position = rot @ (particle.position - center) + center
            w.write_frame(frame)
    return 0


def running_average_usage() -> str:
    return "usage: mill traj running-average traj.dcd --window=10\n"


def mode_traj_running_average(args: Iterable[str]) -> int:
    """Write the running average of positions over a window of frames."""
    args = deque(args)
    window_text = _pop_option(args, "window")
    if window_text is None:
        window_size = 10
    else:
        try:
            window_size = int(window_text)
        except ValueError:
            logger.error("invalid window size: %s", window_text)
            logger.error(running_average_usage())
            return 1
        if window_size <= 0:
            logger.error("window size must be positive: %s", window_text)
            logger.error(running_average_usage())
            return 1

    if not args:
        logger.error("error: mill traj running_average: too few arguments")
        logger.error(running_average_usage())
        return 1

    fname = args.popleft()
    if fname == "help":
        logger.info(running_average_usage())
        return 0

    output = f"{base_name_of(fname)}_averaged_{window_size}{extension_of(fname)}"

    with reader(fname) as r, writer(output) as w:
        w.write_header(r.read_header())

        window = deque()
        for _ in range(window_size):
            frame = r.read_frame()
            if frame is None:
                raise ValueError("trajectory is shorter than the window!")
            window.append(frame)

        normalize = 1.0 / window_size
        while not r.is_eof():
            average = window.popleft()
            for frame in window:
                for target, particle in zip(average, frame, strict=True):
                    target.position = target.position + particle.position
            for particle in average:
                particle.position = particle.position * normalize
            w.write_frame(average)

            frame = r.read_frame()
            if frame is None:
                break
            window.append(frame)
    return 0