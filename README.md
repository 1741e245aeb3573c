# coffeemill

Tools for molecular simulation trajectories. It reads and writes XYZ files.
It edits and transforms trajectories and projects them onto collective axes.
It also rebuilds probability densities along a reaction coordinate, using
histogram reweighting and WHAM.

## Installation

```
pip install coffeemill
```

To run the tests, install the `test` extra: `pip install coffeemill[test]`.

## Command line

The `mill-traj` command runs the trajectory subcommands. Messages and usage
text go to the log, which is standard error by default. The exit status is 0
on success and 1 on error.

```
mill-traj help
mill-traj help <command>
mill-traj convert traj.xyz xyz reference.xyz
mill-traj extract traj.xyz 10 30
mill-traj join traj1.xyz traj2.xyz traj3.xyz
mill-traj join input.toml
mill-traj split traj.xyz 100 --skip-initial
mill-traj translate traj.xyz 1.0 0.0 0.0
mill-traj rotate traj.xyz z 90
mill-traj rotate traj.xyz vec 0 0 1 90
mill-traj running-average traj.xyz --window=10
mill-traj projection traj.xyz axes.xyz origin.xyz --output=proj.dat
```

What each subcommand does:

- `convert FILE FORMAT [REFERENCE]` writes `FILE_converted.FORMAT`. If a
  reference file is given, its header attributes fill in any attributes that
  are missing. The particle attributes of its first frame are also copied
  onto every frame that has the same number of particles.
- `extract FILE START STOP` writes frames START to STOP, both included and
  counted from 0, to `FILE_STARTtoSTOP.xyz`. For `traj.xyz 10 30` that is
  `traj_10to30.xyz`.
- `join FILE...` puts the files one after another into `FIRST_joined.xyz`.
  It can also take a TOML file with `inputs` (a list of paths), `output`, and
  `include_initial` (default `true`). When `include_initial` is false, the
  first frame of every input is dropped. TOML input needs Python 3.11 or
  newer.
- `split FILE N [--skip-initial]` writes files of N frames each:
  `FILE_0.xyz`, `FILE_1.xyz`, and so on. With `--skip-initial`, the first
  frame is dropped.
- `translate FILE X Y Z` moves every particle by the vector (X, Y, Z). It
  writes to a file such as `traj_translated_1.000000_0.000000_0.000000.xyz`.
- `rotate FILE x|y|z ANGLE` and `rotate FILE vec X Y Z ANGLE` rotate each
  frame about its centroid. The angle is in degrees. The `vec` axis is used
  as given and is not normalised. The output is named like
  `traj_rotated_z90.xyz`.
- `running-average FILE [--window=N]` writes the average of positions over
  a sliding window of N frames (default 10) to `FILE_averaged_N.xyz`.
  `running_average` is accepted as the same command.
- `projection FILE AXES ORIGIN [--output=PATH]` writes one line per frame.
  The line holds the frame index and the frame's displacement from the
  origin, projected onto each frame of the axes file. The origin file must
  hold exactly one frame. The default output file is `FILE_projected.dat`.

## Library

```python
from coffeemill.formats import reader, writer
from coffeemill.traj_transform import rotation_matrix

rot = rotation_matrix("z", 90.0)
with reader("traj.xyz") as r, writer("traj_rotated.xyz") as w:
    w.write_header(r.read_header())
    for frame in r:
        for particle in frame:
            particle.position = rot @ particle.position
        w.write_frame(frame)
```

- **Data model:**
  - `coffeemill.attribute` (`Attribute`, `AttributeKind`)
  - `coffeemill.particle` (`Particle`)
  - `coffeemill.snapshot` (`Snapshot`)
  - `coffeemill.trajectory` (`Trajectory`)
  - `coffeemill.topology` (`Topology`)
  - `coffeemill.boundary` (`BoundaryCondition`, `UnlimitedBoundary`,
    `CuboidalPeriodicBoundary`)
- **File input and output:**
  - `coffeemill.formats` (`reader`, `writer`, `extension_of`, `base_name_of`,
    `is_writable_extension`)
  - `coffeemill.xyz` (`XYZReader`, `XYZWriter`)
  - `coffeemill.trajio`, which holds the base classes `TrajectoryReader` and
    `TrajectoryWriter`. Malformed files raise `TrajectoryFormatError`, and so
    do formats with no reader or writer.
- **Amino acid codes:** `coffeemill.amino_acid` (`three_to_one`,
  `one_to_three`).
- **Reweighting:**
  - `coffeemill.histogram` (`Histogram`, `ProbabilityDensity`)
  - `coffeemill.potential` (`ReactionDistance`, `HarmonicPotential`,
    `make_histogram`, `reweight`)
  - `coffeemill.wham` (`WHAMSolver`). `WHAMSolver` takes a list of
    `(samples, potential)` windows and returns a `ProbabilityDensity`. It
    raises `WHAMConvergenceError` if the iteration does not converge.

## What it does not do

- The only trajectory format is XYZ. Files with any other extension, such as
  `.dcd` or `.pdb`, cannot be read or written.
- `mill-traj help` lists an `impose` command for superimposing frames. There
  is no such command, and `mill-traj impose` is rejected as unknown.
- There is no command that generates topology (PSF) files.