import pytest

from coffeemill.particle import Particle
from coffeemill.snapshot import Snapshot
from coffeemill.trajectory import Trajectory
from coffeemill.trajio import TrajectoryFormatError
from coffeemill.xyz import XYZReader, XYZWriter

CONTENT = (
    "3\n"
    "comment1\n"
    "A 1.00 2.00 3.00\n"
    "B 4.00 5.00 6.00\n"
    "C 7.00 8.00 9.00\n"
    "3\n"
    "comment2\n"
    "A 1.50 2.50 3.50\n"
    "B 4.50 5.50 6.50\n"
    "C 7.50 8.50 9.50\n"
)

FIRST = [(1.0, 2.0, 3.0), (4.0, 5.0, 6.0), (7.0, 8.0, 9.0)]
SECOND = [(1.5, 2.5, 3.5), (4.5, 5.5, 6.5), (7.5, 8.5, 9.5)]


@pytest.fixture
def xyz_file(tmp_path):
    path = tmp_path / "test.xyz"
    path.write_text(CONTENT)
    return path


def positions(frame):
    return [tuple(float(v) for v in particle.position) for particle in frame]


def test_read_header_is_empty(xyz_file):
    with XYZReader(xyz_file) as reader:
        assert reader.read_header() == {}


def test_read_whole_trajectory(xyz_file):
    with XYZReader(xyz_file) as reader:
        traj = reader.read()
    assert len(traj) == 2
    assert len(traj[0]) == 3
    assert traj[0]["comment"].as_string() == "comment1"
    assert positions(traj[0]) == FIRST
    assert len(traj[1]) == 3
    assert traj[1]["comment"].as_string() == "comment2"
    assert positions(traj[1]) == SECOND
    assert [p["name"].as_string() for p in traj[0]] == ["A", "B", "C"]


def test_read_frame_by_index(xyz_file):
    with XYZReader(xyz_file) as reader:
        frame1 = reader.read_frame(0)
        assert positions(frame1) == FIRST
        frame2 = reader.read_frame(1)
        assert positions(frame2) == SECOND


def test_read_frame_past_end_returns_none(xyz_file):
    with XYZReader(xyz_file) as reader:
        assert reader.read_frame(5) is None


def test_iteration(xyz_file):
    with XYZReader(xyz_file) as reader:
        it = iter(reader)
        frame1 = next(it)
        frame2 = next(it)
        with pytest.raises(StopIteration):
            next(it)
        assert reader.is_eof()
    assert positions(frame1) == FIRST
    assert positions(frame2) == SECOND


def test_rewind_restarts(xyz_file):
    with XYZReader(xyz_file) as reader:
        list(reader)
        reader.rewind()
        assert not reader.is_eof()
        assert positions(reader.read_frame()) == FIRST


def test_bad_count_line_raises(tmp_path):
    path = tmp_path / "bad.xyz"
    path.write_text("abc\ncomment\n")
    with XYZReader(path) as reader:
        with pytest.raises(TrajectoryFormatError):
            reader.read_frame()


def test_truncated_frame_raises(tmp_path):
    path = tmp_path / "short.xyz"
    path.write_text("2\ncomment\nA 1 2 3\n")
    with XYZReader(path) as reader:
        with pytest.raises(TrajectoryFormatError):
            reader.read_frame()


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        XYZReader(tmp_path / "missing.xyz")


def test_writer_line_format(tmp_path):
    path = tmp_path / "out.xyz"
    frame = Snapshot([Particle((1.0, 2.0, 3.0), {"name": "A"})], {"comment": "c"})
    with XYZWriter(path) as writer:
        writer.write_frame(frame)
    gap = " " * 11
    expected = "1\nc\nA" + gap + "1.000000" + gap + "2.000000" + gap + "3.000000\n"
    assert path.read_text() == expected


def test_writer_defaults_name_and_comment(tmp_path):
    path = tmp_path / "out.xyz"
    with XYZWriter(path) as writer:
        writer.write_frame(Snapshot.from_positions([(0.0, 0.0, 0.0)]))
    lines = path.read_text().splitlines()
    assert lines[0] == "1"
    assert lines[1] == ""
    assert lines[2].startswith("X ")


def test_write_and_read_round_trip(xyz_file, tmp_path):
    with XYZReader(xyz_file) as reader:
        original = reader.read()
    out = tmp_path / "copy.xyz"
    with XYZWriter(out) as writer:
        writer.write_header(original)
        writer.write(original)
        writer.write_footer(original)
    with XYZReader(out) as reader:
        copy = reader.read()
    assert len(copy) == len(original)
    for a, b in zip(original, copy):
        assert positions(a) == positions(b)
        assert a["comment"] == b["comment"]
        assert [p["name"] for p in a] == [p["name"] for p in b]


def test_write_empty_trajectory_writes_nothing(tmp_path):
    path = tmp_path / "empty.xyz"
    with XYZWriter(path) as writer:
        writer.write(Trajectory())
    assert path.read_text() == ""