import pytest

from coffeemill.particle import Particle
from coffeemill.snapshot import Snapshot
from coffeemill.formats import (
    base_name_of,
    extension_of,
    is_writable_extension,
    reader,
    writer,
)
from coffeemill.trajio import TrajectoryFormatError


@pytest.mark.parametrize(
    "path, extension",
    [("hoge.txt", ".txt"), ("piyo.dat", ".dat"), ("fuga.xlsx", ".xlsx")],
)
def test_extension_of(path, extension):
    assert extension_of(path) == extension


def test_base_name_of_strips_extension():
    assert base_name_of("traj.dcd") == "traj"
    assert base_name_of("data/traj.xyz") + extension_of("data/traj.xyz") == "data/traj.xyz"


def test_extension_of_without_extension_is_empty():
    assert extension_of("traj") == ""


def test_writable_extensions():
    assert is_writable_extension(".xyz")
    assert not is_writable_extension(".toml")


def test_reader_and_writer_dispatch_round_trip(tmp_path):
    path = tmp_path / "traj.xyz"
    frame = Snapshot([Particle((1.0, 2.0, 3.0), {"name": "CA"})], {"comment": "hi"})
    with writer(path) as w:
        w.write_frame(frame)
    with reader(path) as r:
        read = r.read_frame()
    assert read["comment"].as_string() == "hi"
    assert read[0]["name"].as_string() == "CA"
    assert read[0].position.tolist() == [1.0, 2.0, 3.0]


def test_unsupported_formats_raise(tmp_path):
    with pytest.raises(TrajectoryFormatError):
        reader(tmp_path / "traj.unknown")
    with pytest.raises(TrajectoryFormatError):
        writer(tmp_path / "traj.unknown")