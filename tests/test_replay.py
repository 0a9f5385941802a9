import io

import pytest

import replay


def run(monkeypatch, argv, stdin=""):
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
    return replay.main(argv)


def test_fifo_from_stdin(monkeypatch, capsys):
    code = run(monkeypatch, ["fifo"],
               "2021-01-01,buy,10000.00,1.00000000\n2021-02-01,sell,20000.00,0.50000000\n")
    assert code == 0
    assert capsys.readouterr().out == "1,2021-01-01,10000.00,0.50000000\n"


def test_selector_is_case_insensitive(monkeypatch, capsys):
    stdin = ("2021-01-01,buy,10000.00,1.0\n2021-01-02,buy,20000.00,1.0\n"
             "2021-02-01,sell,20000.00,1.5\n\nignored,after,blank,line\n")
    assert run(monkeypatch, ["HIFO"], stdin) == 0
    assert capsys.readouterr().out == "1,2021-01-01,10000.00,0.50000000\n"


def test_input_file_and_report(monkeypatch, capsys, tmp_path):
    log = tmp_path / "log.csv"
    log.write_text("2021-01-01,buy,10000.00,1.0\n2021-01-01,buy,15000.00,1.0\n")
    report = tmp_path / "report.md"
    assert run(monkeypatch, ["fifo", "--input", str(log), "--report", str(report)]) == 0
    assert capsys.readouterr().out == "1,2021-01-01,12500.00,2.00000000\n"
    assert "- **Open lots**: 1" in report.read_text()


def test_insufficient_lots_exits_nonzero(monkeypatch, capsys):
    code = run(monkeypatch, ["hifo"], "d1,buy,1,2.0\nd2,sell,1,5.0\n")
    captured = capsys.readouterr()
    assert code == 1
    assert captured.out == ""
    assert "ERROR: Problem executing sale (hifo)" in captured.err
    assert "Example usage" in captured.err


def test_bad_record_exits_nonzero(monkeypatch, capsys):
    assert run(monkeypatch, ["fifo"], "d1,buy,1\n") == 1
    assert "incorrect argument count" in capsys.readouterr().err


def test_missing_input_file(monkeypatch, capsys, tmp_path):
    assert run(monkeypatch, ["fifo", "--input", str(tmp_path / "nope.csv")]) == 1
    assert "ERROR:" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [[], ["lifo"], ["fifo", "hifo"]])
def test_bad_arguments(monkeypatch, argv):
    with pytest.raises(SystemExit) as err:
        run(monkeypatch, argv)
    assert err.value.code == 2
