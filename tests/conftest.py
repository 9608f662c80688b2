import pytest

from vbo_merge.tracks import DEFAULT_START_FINISH_LINES, Coordinate, StartFinishLine


@pytest.fixture
def vertical_line():
    """Start/finish line on x=0 between y=-1 and y=1."""
    return StartFinishLine("Test", Coordinate(0.0, -1.0), Coordinate(0.0, 1.0))


@pytest.fixture
def megara_lap_path():
    """
    Five points around the Megara start/finish line forming one lap.

    A -> B crosses the line, B -> C and C -> A stay clear of it, and the
    final A -> B crosses it again.
    """
    line = DEFAULT_START_FINISH_LINES[0]
    ux, uy = line.b.x - line.a.x, line.b.y - line.a.y
    mx, my = (line.a.x + line.b.x) / 2, (line.a.y + line.b.y) / 2
    # Perpendicular to the line, same length
    px, py = -uy, ux

    a = Coordinate(mx - px, my - py)
    b = Coordinate(mx + px, my + py)
    c = Coordinate(b.x + 3 * ux, b.y + 3 * uy)
    return [a, b, c, a, b]


@pytest.fixture
def session_files(tmp_path, megara_lap_path):
    """Write a matching 5-sample VBO file and ECU log; return their paths."""
    speeds = ["050.0", "060.0", "100.0", "070.0", "055.0"]
    times = ["120000.000", "120000.125", "120000.250", "120000.375", "120000.500"]

    vbo_lines = [
        "File created on 01/06/2024 at 12:00:00",
        "",
        "[header]",
        "satellites",
        "time",
        "latitude",
        "longitude",
        "velocity kmh",
        "",
        "[comments]",
        "Test session",
        "",
        "[column names]",
        "sats time lat long velocity",
        "",
        "[data]",
    ]
    for time, point, speed in zip(times, megara_lap_path, speeds):
        vbo_lines.append(f"008 {time} {point.x!r} {point.y!r} {speed}")

    ecu_lines = [
        "Time(S),Speed,OilPress,VTA V",
        "10.000,50,3.0,4.0",
        "10.125,99,3.0,2.3",
        "10.250,60,3.0,0.6",
        "10.375,55,3.0,4.0",
        "10.500,50,3.0,4.0",
    ]

    vbo_path = tmp_path / "session.vbo"
    vbo_path.write_text("\n".join(vbo_lines) + "\n", encoding="utf-8")
    ecu_path = tmp_path / "ecu.csv"
    ecu_path.write_text("\n".join(ecu_lines) + "\n", encoding="utf-8")
    return ecu_path, vbo_path
