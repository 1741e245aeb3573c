"""Projection of trajectory frames onto 3N-dimensional axes."""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable

import numpy as np

from coffeemill.formats import base_name_of, reader

logger = logging.getLogger(__name__)

_HEADER = (
    "# [frame index], [coordinate along 1st axis], [coordinate along 2nd axis], ...\n"
)


def _pop_option(args: deque[str], name: str) -> str | None:
    """Remove a ``--name=value`` argument from ``args`` and return its value."""
    prefix = f"--{name}="
    for item in list(args):
        if item.startswith(prefix):
            args.remove(item)
            return item[len(prefix):]
    return None


def projection_usage() -> str:
    return (
        "usage: mill traj projection [trajfile] [axes] [origin] --output=(optional)\n"
        "       project trajectory onto a 3N-dimensional vector (axes).\n"
        "       To pass a 3N dimensional vector, trajectory file can be used.\n"
        "       The file should have the same number of elements as the traj file.\n"
    )


def _positions(frame) -> np.ndarray:
    return np.array([particle.position for particle in frame], dtype=float).reshape(-1, 3)


def mode_traj_projection(args: Iterable[str]) -> int:
    """Write, for every frame, its displacement from an origin projected on each axis."""
    args = deque(args)
    output_opt = _pop_option(args, "output")
    if not args:
        logger.error("mill traj projection: too few arguments")
        logger.error(projection_usage())
        return 1

    traj = args.popleft()
    if traj == "help":
        logger.info(projection_usage())
        return 0
    if len(args) < 2:
        logger.error("mill traj projection: too few arguments")
        logger.info(projection_usage())
        return 1

    axes_file = args.popleft()
    orig_file = args.popleft()

    with reader(orig_file) as r:
        origin_traj = r.read()
    with reader(axes_file) as r:
        axes = r.read()

    if len(origin_traj) > 1:
        logger.warning(
            "mill traj projection: origin file (%s) has multiple (%d) number of "
            "structures. Only the first frame is used as the origin.",
            orig_file, len(origin_traj),
        )
        return 1
    if len(origin_traj) == 0:
        raise ValueError(f"mill traj projection: origin file ({orig_file}) has no structure")

    origin = _positions(origin_traj[0])
    axis_vectors = [_positions(axis) for axis in axes]
    output = output_opt if output_opt is not None else f"{base_name_of(traj)}_projected.dat"

    try:
        stream = open(output, "w", encoding="utf-8")
    except OSError:
        logger.error("mill traj projection: file open error -> %s", output)
        return 1

    with stream, reader(traj) as r:
        stream.write(_HEADER)
        for index, frame in enumerate(r):
            positions = _positions(frame)
            stream.write(f"{index:>8}")
            for axis in axis_vectors:
                if len(positions) != len(axis):
                    raise ValueError(
                        "mill traj projection: number of particles in a frame"
                        " differs from that of the axis"
                    )
                if len(positions) != len(origin):
                    raise ValueError(
                        "mill traj projection: number of particles in a frame"
                        " differs from that of the origin"
                    )
                coord = float(np.sum((positions - origin) * axis))
                stream.write(f" {coord:.10g}")
            stream.write("\n")
    return 0