import pytest

from vbo_merge.data_loading import parse_vbo_lines, read_ecu_log, read_vbo
from vbo_merge.errors import EcuFormatError, MissingChannelError, TimeFormatError, VboFormatError

VBO_TEXT = """File created on 01/06/2024 at 12:00:00

[header]
satellites
time
velocity kmh

[comments]
some text

[column names]
sats time velocity

[data]
008 120000.00 050.0
008 120000.10 100.0
008 120000.20 040.0
"""


def test_parse_vbo_lines_reads_header_and_data():
    table = parse_vbo_lines(VBO_TEXT.splitlines(keepends=True))

    assert list(table) == ["satellites", "time", "velocity kmh"]
    assert table["time"] == ["120000.00", "120000.10", "120000.20"]
    assert table["velocity kmh"] == ["050.0", "100.0", "040.0"]


def test_parse_vbo_lines_rejects_ragged_rows():
    lines = VBO_TEXT.splitlines() + ["008 120000.30"]

    with pytest.raises(VboFormatError, match="expected 3 values"):
        parse_vbo_lines(lines)


def test_parse_vbo_lines_requires_sections():
    with pytest.raises(VboFormatError):
        parse_vbo_lines(["[data]", "1 2"])
    with pytest.raises(VboFormatError):
        parse_vbo_lines(["[header]", "time", ""])


def test_read_vbo_normalizes_time(tmp_path):
    path = tmp_path / "session.vbo"
    path.write_text(VBO_TEXT, encoding="utf-8")

    table = read_vbo(path)

    assert table["TimeMillis"] == [-100, 0, 100]
    assert table.sample_count == 3


def test_read_vbo_rejects_bad_time(tmp_path):
    path = tmp_path / "session.vbo"
    path.write_text(VBO_TEXT.replace("120000.10", "12:00:00.1"), encoding="utf-8")

    with pytest.raises(TimeFormatError):
        read_vbo(path)


def test_read_ecu_log_normalizes_time_and_smooths_oil_pressure(tmp_path):
    path = tmp_path / "ecu.csv"
    path.write_text(
        "Time(S),Speed,OilPress,VTA V\n"
        "5.000,80,4.0,1.0\n"
        "5.250,120,1.0,2.0\n"
        "5.500,90,4.0,3.0\n",
        encoding="utf-8",
    )

    table = read_ecu_log(path, smoothing_passes=1)

    assert table["TimeMillis"] == [-250, 0, 250]
    assert table["OilPress"] == pytest.approx([4.0, 3.0, 3.0])
    assert table["VTA V"] == ["1.0", "2.0", "3.0"]
    assert table["Time(S)"] == ["5.000", "5.250", "5.500"]


def test_read_ecu_log_without_oil_pressure(tmp_path):
    path = tmp_path / "ecu.csv"
    path.write_text("Time(S),Speed\n1.0,10\n2.0,20\n", encoding="utf-8")

    table = read_ecu_log(path)

    assert table["TimeMillis"] == [-1000, 0]


def test_read_ecu_log_requires_speed(tmp_path):
    path = tmp_path / "ecu.csv"
    path.write_text("Time(S),RPM\n1.0,3000\n", encoding="utf-8")

    with pytest.raises(MissingChannelError):
        read_ecu_log(path)


def test_read_ecu_log_rejects_empty_file(tmp_path):
    path = tmp_path / "ecu.csv"
    path.write_text("", encoding="utf-8")

    with pytest.raises(EcuFormatError):
        read_ecu_log(path)


def test_read_ecu_log_ignores_trailing_commas_on_data_rows(tmp_path):
    path = tmp_path / "ecu.csv"
    path.write_text(
        "Time(S),Speed,OilPress,VTA V\n"
        "10.000,50,3.0,4.0,\n"
        "10.125,99,3.0,2.3,\n"
        "10.250,60,3.0,0.6,\n",
        encoding="utf-8",
    )

    table = read_ecu_log(path, smoothing_passes=0)

    assert list(table) == ["Time(S)", "Speed", "OilPress", "VTA V", "TimeMillis"]
    assert table["Time(S)"] == ["10.000", "10.125", "10.250"]
    assert table["VTA V"] == ["4.0", "2.3", "0.6"]
    assert table["TimeMillis"] == [-125, 0, 125]


def test_read_ecu_log_ignores_trailing_comma_on_header(tmp_path):
    path = tmp_path / "ecu.csv"
    path.write_text(
        "Time(S),Speed,OilPress,VTA V,\n"
        "10.000,50,3.0,4.0,\n"
        "10.125,99,3.0,2.3,\n",
        encoding="utf-8",
    )

    table = read_ecu_log(path, smoothing_passes=0)

    assert list(table) == ["Time(S)", "Speed", "OilPress", "VTA V", "TimeMillis"]
    assert table["Speed"] == ["50", "99"]


def test_read_ecu_log_rejects_undecodable_file(tmp_path):
    path = tmp_path / "ecu.csv"
    path.write_bytes(b"Time(S),Speed\n1.0,\xff\xfe\n")

    with pytest.raises(EcuFormatError):
        read_ecu_log(path)


def test_read_vbo_rejects_undecodable_file(tmp_path):
    path = tmp_path / "session.vbo"
    path.write_bytes(VBO_TEXT.encode("utf-8") + b"\xff\xfe\n")

    with pytest.raises(VboFormatError):
        read_vbo(path)
