import logging

import pytest

from timetxt.cli import EXIT_OK, EXIT_PARSE_ERROR, EXIT_SOURCE_ERROR, main

SAMPLE = (
    "1822-01-15\n"
    "// comment\n"
    "3:00 4:00 Sketched ideas for a new machine\n"
    "4:00 11:00 Created the first computer\n"
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("TIMETXT_CONFIG_PATH", "TIMETXT_FILE", "TIMETXT_SORT_DATES", "TIMETXT_SHOW_ELAPSED", "TIMETXT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_prints_rendered_log(tmp_path, capsys):
    path = tmp_path / "time.txt"
    path.write_text(SAMPLE)
    assert main([str(path)]) == EXIT_OK
    out = capsys.readouterr().out
    assert out == (
        "1822-01-15\n"
        "03:00 04:00 Sketched ideas for a new machine\n"
        "04:00 11:00 Created the first computer\n"
    )


def test_elapsed_and_csv(tmp_path, capsys):
    path = tmp_path / "time.txt"
    path.write_text(SAMPLE)
    assert main([str(path), "--elapsed"]) == EXIT_OK
    assert "07:00  04:00 11:00 Created the first computer" in capsys.readouterr().out
    assert main([str(path), "--csv"]) == EXIT_OK
    assert capsys.readouterr().out.splitlines()[0] == "date,start,end,description"


def test_file_from_env(tmp_path, capsys, monkeypatch):
    path = tmp_path / "time.txt"
    path.write_text(SAMPLE)
    monkeypatch.setenv("TIMETXT_FILE", str(path))
    assert main([]) == EXIT_OK
    assert capsys.readouterr().out.startswith("1822-01-15\n")


def test_missing_file_reports_source_error(tmp_path, capsys):
    assert main([str(tmp_path / "nope.txt")]) == EXIT_SOURCE_ERROR
    assert "Cannot read" in capsys.readouterr().err


def test_parse_error_exit_code(tmp_path, capsys):
    path = tmp_path / "time.txt"
    path.write_text("1822-01-15\n25:99 04:00 bad time\n")
    assert main([str(path)]) == EXIT_PARSE_ERROR
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "line 2" in captured.err


def test_no_file_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


UNSORTED = "2020-01-02\n09:00 10:00 later day\n2020-01-01\n09:00 10:00 earlier day\n"


def test_no_sort_overrides_env(tmp_path, capsys, monkeypatch):
    path = tmp_path / "time.txt"
    path.write_text(UNSORTED)
    monkeypatch.setenv("TIMETXT_SORT_DATES", "1")
    assert main([str(path)]) == EXIT_OK
    assert capsys.readouterr().out.startswith("2020-01-01\n")
    assert main([str(path), "--no-sort"]) == EXIT_OK
    assert capsys.readouterr().out == UNSORTED


def test_no_elapsed_overrides_env(tmp_path, capsys, monkeypatch):
    path = tmp_path / "time.txt"
    path.write_text(UNSORTED)
    monkeypatch.setenv("TIMETXT_SHOW_ELAPSED", "yes")
    assert main([str(path)]) == EXIT_OK
    assert "total 01:00" in capsys.readouterr().out
    assert main([str(path), "--no-elapsed"]) == EXIT_OK
    assert capsys.readouterr().out == UNSORTED


def test_end_before_start_is_logged_as_warning(tmp_path, capsys, caplog):
    path = tmp_path / "time.txt"
    path.write_text("2020-01-01\n23:00 01:00 late night deploy\n")
    with caplog.at_level(logging.WARNING, logger="timetxt"):
        assert main([str(path)]) == EXIT_OK
    assert "23:00 01:00 late night deploy" in capsys.readouterr().out
    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert any("End time 01:00 is before start time 23:00" in m for m in warnings)


def test_valid_log_has_no_warnings(tmp_path, caplog):
    path = tmp_path / "time.txt"
    path.write_text(SAMPLE)
    with caplog.at_level(logging.WARNING, logger="timetxt"):
        assert main([str(path)]) == EXIT_OK
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
