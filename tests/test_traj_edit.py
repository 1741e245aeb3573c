import pytest

from coffeemill.formats import reader
from coffeemill.traj_edit import (
    convert_usage,
    extract_usage,
    join_usage,
    mode_traj_convert,
    mode_traj_extract,
    mode_traj_join,
    mode_traj_split,
    split_usage,
)
from coffeemill.trajio import TrajectoryFormatError


def _frames(count, particles=3, offset=0.0):
    return [
        [(f"P{j}", i + offset, float(j), i + j + 0.5) for j in range(particles)]
        for i in range(count)
    ]


def _write_xyz(path, frames):
    lines = []
    for index, frame in enumerate(frames):
        lines.append(f"{len(frame)}\n")
        lines.append(f"frame{index}\n")
        for name, x, y, z in frame:
            lines.append(f"{name} {x} {y} {z}\n")
    path.write_text("".join(lines))
    return path


def _positions(path):
    with reader(path) as r:
        return [[p.position.tolist() for p in frame] for frame in r]


def _names(path):
    with reader(path) as r:
        return [[p["name"].as_string() for p in frame] for frame in r]


def _expected_positions(frames):
    return [[[x, y, z] for _, x, y, z in frame] for frame in frames]


@pytest.mark.parametrize(
    "command", [mode_traj_convert, mode_traj_extract, mode_traj_join, mode_traj_split]
)
def test_help_returns_zero(command):
    assert command(["help"]) == 0


@pytest.mark.parametrize(
    "command", [mode_traj_convert, mode_traj_extract, mode_traj_join, mode_traj_split]
)
def test_no_arguments_is_an_error(command):
    assert command([]) == 1


def test_usage_texts():
    assert convert_usage().startswith("usage: mill traj convert")
    assert extract_usage().startswith("usage: mill traj extract")
    assert join_usage().startswith("usage: mill traj join")
    assert split_usage().startswith("usage: mill dcd split")


def test_convert_copies_frames(tmp_path):
    frames = _frames(3)
    source = _write_xyz(tmp_path / "traj.xyz", frames)
    assert mode_traj_convert([str(source), "xyz"]) == 0
    output = tmp_path / "traj.xyz_converted.xyz"
    assert output.exists()
    assert _positions(output) == _expected_positions(frames)
    assert _names(output) == _names(source)


def test_convert_unsupported_format_raises(tmp_path):
    source = _write_xyz(tmp_path / "traj.xyz", _frames(1))
    with pytest.raises(TrajectoryFormatError):
        mode_traj_convert([str(source), "dcd"])


def test_convert_missing_format_is_an_error(tmp_path):
    source = _write_xyz(tmp_path / "traj.xyz", _frames(1))
    assert mode_traj_convert([str(source)]) == 1


def test_convert_takes_attributes_from_reference(tmp_path):
    frames = _frames(2)
    source = _write_xyz(tmp_path / "traj.xyz", frames)
    ref_frames = [[(f"R{j}", 0.0, 0.0, 0.0) for j in range(3)]]
    ref = _write_xyz(tmp_path / "ref.xyz", ref_frames)
    assert mode_traj_convert([str(source), "xyz", str(ref)]) == 0
    output = tmp_path / "traj.xyz_converted.xyz"
    assert _names(output) == [["R0", "R1", "R2"]] * 2
    assert _positions(output) == _expected_positions(frames)


def test_convert_reference_of_other_size_is_ignored(tmp_path):
    frames = _frames(2)
    source = _write_xyz(tmp_path / "traj.xyz", frames)
    ref = _write_xyz(tmp_path / "ref.xyz", [[("R0", 0.0, 0.0, 0.0)]])
    assert mode_traj_convert([str(source), "xyz", str(ref)]) == 0
    output = tmp_path / "traj.xyz_converted.xyz"
    assert _names(output) == _names(source)


def test_extract_includes_both_ends(tmp_path):
    frames = _frames(5)
    source = _write_xyz(tmp_path / "traj.xyz", frames)
    assert mode_traj_extract([str(source), "1", "3"]) == 0
    output = tmp_path / "traj_1to3.xyz"
    assert _positions(output) == _expected_positions(frames[1:4])


def test_extract_begin_after_end_is_an_error(tmp_path):
    source = _write_xyz(tmp_path / "traj.xyz", _frames(5))
    assert mode_traj_extract([str(source), "3", "1"]) == 1
    assert not (tmp_path / "traj_3to1.xyz").exists()


def test_extract_rejects_non_integers(tmp_path):
    source = _write_xyz(tmp_path / "traj.xyz", _frames(5))
    assert mode_traj_extract([str(source), "one", "3"]) == 1
    assert mode_traj_extract([str(source), "1", "x"]) == 1


def test_extract_too_few_arguments(tmp_path):
    source = _write_xyz(tmp_path / "traj.xyz", _frames(5))
    assert mode_traj_extract([str(source), "1"]) == 1


def test_extract_past_the_end_raises(tmp_path):
    source = _write_xyz(tmp_path / "traj.xyz", _frames(2))
    with pytest.raises(TrajectoryFormatError):
        mode_traj_extract([str(source), "0", "5"])


def test_join_concatenates_files(tmp_path):
    first_frames = _frames(2)
    second_frames = _frames(3, offset=10.0)
    first = _write_xyz(tmp_path / "a.xyz", first_frames)
    second = _write_xyz(tmp_path / "b.xyz", second_frames)
    assert mode_traj_join([str(first), str(second)]) == 0
    output = tmp_path / "a_joined.xyz"
    assert _positions(output) == _expected_positions(first_frames + second_frames)


def test_split_into_chunks(tmp_path):
    frames = _frames(5)
    source = _write_xyz(tmp_path / "traj.xyz", frames)
    assert mode_traj_split([str(source), "2"]) == 0
    parts = [_positions(tmp_path / f"traj_{i}.xyz") for i in range(3)]
    assert [len(part) for part in parts] == [2, 2, 1]
    assert [frame for part in parts for frame in part] == _expected_positions(frames)
    assert not (tmp_path / "traj_3.xyz").exists()


def test_split_skip_initial(tmp_path):
    frames = _frames(5)
    source = _write_xyz(tmp_path / "traj.xyz", frames)
    assert mode_traj_split([str(source), "2", "--skip-initial"]) == 0
    parts = [_positions(tmp_path / f"traj_{i}.xyz") for i in range(2)]
    assert [frame for part in parts for frame in part] == _expected_positions(frames[1:])
    assert not (tmp_path / "traj_2.xyz").exists()


def test_split_rejects_non_integer(tmp_path):
    source = _write_xyz(tmp_path / "traj.xyz", _frames(2))
    assert mode_traj_split([str(source), "many"]) == 1
    assert not (tmp_path / "traj_0.xyz").exists()