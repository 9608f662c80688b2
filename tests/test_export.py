from datetime import datetime

from vbo_merge.channels import ChannelTable
from vbo_merge.export import column_name, format_vbo, write_vbo

CREATED = datetime(2024, 6, 1, 14, 5, 9)


def test_column_name_sanitizes_headers():
    assert column_name("velocity kmh") == "velocity"
    assert column_name("ecu_VTA V") == "ecu_VTA-V"
    assert column_name("ecu_Inj  Duty") == "ecu_Inj-Duty"
    assert column_name("latitude") == "latitude"


def test_format_vbo_layout():
    table = ChannelTable({
        "velocity kmh": ["050.0", "060.0"],
        "ecu_VTA V": ["0.6", "4.0"],
        "calc_throttlePercentage": [0.0, 100.0],
    })

    lines = format_vbo(table, created=CREATED).splitlines()

    assert lines == [
        "File created on 2024/06/01 at 14:05:09",
        "",
        "[header]",
        "calc_throttlePercentage",
        "ecu_VTA V",
        "velocity kmh",
        "",
        "[comments]",
        "Merged vbo with ecu logs",
        "",
        "[column names]",
        "calc_throttlePercentage ecu_VTA-V velocity",
        "",
        "[data]",
        "0.0 0.6 050.0",
        "100.0 4.0 060.0",
    ]


def test_format_vbo_without_samples():
    text = format_vbo(ChannelTable({"time": []}), created=CREATED)

    assert text.endswith("[data]\n")


def test_write_vbo(tmp_path):
    table = ChannelTable({"time": ["120000.00"]})

    path = write_vbo(table, tmp_path / "out.vbo", created=CREATED)

    assert path.read_text(encoding="utf-8").splitlines()[-1] == "120000.00"
