"""Tests for the command-line driver."""

import pytest

from winstat.cli import EXIT_OK, EXIT_REJECTED, EXIT_USAGE, build_parser, main, resolve_settings


def test_streams_values(capsys):
    assert main(['-w', '5', '1', '2', '3', '4', '5', '6', '7', '8']) == EXIT_OK

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 8
    assert lines[0] == "add 1.0, window stats => mean: 1.0, standard deviation: 0.0"
    assert lines[-1] == "add 8.0, window stats => mean: 6.0, standard deviation: 1.4142135623730951"


@pytest.mark.parametrize("size", ['0', '1'])
def test_invalid_window_size(size, capsys):
    assert main(['-w', size, '1', '2']) == EXIT_USAGE

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "window_size" in captured.err


def test_unknown_method(capsys):
    assert main(['-w', '3', '-m', 'ewma', '1']) == EXIT_USAGE
    assert "Unknown variance method 'ewma'" in capsys.readouterr().err


def test_strict_rejects_nan(capsys):
    assert main(['-w', '3', '--strict', '1', 'nan', '2']) == EXIT_REJECTED

    captured = capsys.readouterr()
    assert len(captured.out.splitlines()) == 1
    assert "not finite" in captured.err


def test_lenient_accepts_nan(capsys):
    assert main(['-w', '2', '1', 'nan', '3', '4']) == EXIT_OK

    lines = capsys.readouterr().out.splitlines()
    assert "mean: nan" in lines[1]
    assert lines[-1] == "add 4.0, window stats => mean: 3.5, standard deviation: 0.5"


def test_reads_csv_column(tmp_path, capsys):
    path = tmp_path / "latency.csv"
    path.write_text("host,ms\na,10\nb,20\nc,30\n")

    assert main(['-w', '2', '--csv', str(path), '--column', 'ms']) == EXIT_OK

    lines = capsys.readouterr().out.splitlines()
    assert lines[-1] == "add 30.0, window stats => mean: 25.0, standard deviation: 5.0"


def test_missing_csv(tmp_path, capsys):
    assert main(['-w', '2', '--csv', str(tmp_path / "none.csv")]) == EXIT_USAGE
    assert capsys.readouterr().err.startswith("Error:")


def test_config_file_with_overrides(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("window:\n  size: 7\n  method: naive\n  ddof: 1\n")

    args = build_parser().parse_args(['--config', str(path), '--ddof', '0'])
    settings = resolve_settings(args)

    assert settings.size == 7
    assert settings.method == 'naive'
    assert settings.ddof == 0
    assert settings.strict is False


def test_defaults_without_config():
    settings = resolve_settings(build_parser().parse_args([]))

    assert settings.size == 20
    assert settings.method == 'welford'


def test_missing_config(tmp_path, capsys):
    assert main(['--config', str(tmp_path / "missing.yml"), '1']) == EXIT_USAGE
    assert "Error:" in capsys.readouterr().err


def test_no_strict_overrides_config(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("window:\n  size: 3\n  strict: true\n")

    assert resolve_settings(build_parser().parse_args(['--config', str(path)])).strict is True
    assert resolve_settings(build_parser().parse_args(['--config', str(path), '--no-strict'])).strict is False


def test_no_strict_accepts_nan_despite_config(tmp_path, capsys):
    path = tmp_path / "config.yml"
    path.write_text("window:\n  size: 2\n  strict: true\n")

    assert main(['--config', str(path), '--no-strict', '1', 'nan', '3', '4']) == EXIT_OK
    assert capsys.readouterr().out.splitlines()[-1].endswith("mean: 3.5, standard deviation: 0.5")


@pytest.mark.parametrize("body", ["window: 5\n", "- 1\n- 2\n", "logging: verbose\n"])
def test_malformed_config_sections(tmp_path, capsys, body):
    path = tmp_path / "config.yml"
    path.write_text(body)

    assert main(['--config', str(path), '1', '2']) == EXIT_USAGE

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "expected a mapping" in captured.err
