import pytest

from merge_logs import build_parser, main
from vbo_merge import __version__


def test_cli_merges_files(session_files, capsys):
    ecu_path, vbo_path = session_files
    output = vbo_path.with_name("out.vbo")

    status = main([str(ecu_path), str(vbo_path), "--output", str(output)])

    assert status == 0
    assert output.exists()
    stdout = capsys.readouterr().out
    assert f"vbo-merger version {__version__}" in stdout
    assert "done!" in stdout


def test_cli_default_output(session_files):
    ecu_path, vbo_path = session_files

    assert main([str(ecu_path), str(vbo_path), "--smoothing-passes", "0"]) == 0
    assert vbo_path.with_name("session-ecu.vbo").exists()


def test_cli_missing_file(tmp_path, capsys):
    status = main([str(tmp_path / "nope.csv"), str(tmp_path / "nope.vbo")])

    assert status == 1
    assert "File not found" in capsys.readouterr().err


def test_cli_reports_fatal_errors(session_files, capsys):
    ecu_path, vbo_path = session_files
    vbo_path.write_text("[header]\ntime\n\n", encoding="utf-8")

    status = main([str(ecu_path), str(vbo_path)])

    assert status == 1
    assert "Error:" in capsys.readouterr().err
    assert not vbo_path.with_name("session-ecu.vbo").exists()


def test_cli_requires_both_files():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["only-one.csv"])


def test_cli_reports_undecodable_input(session_files, capsys):
    ecu_path, vbo_path = session_files
    ecu_path.write_bytes(b"Time(S),Speed\n1.0,\xff\n")

    status = main([str(ecu_path), str(vbo_path)])

    assert status == 1
    assert "Error:" in capsys.readouterr().err
