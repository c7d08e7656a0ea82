from pathlib import Path
from unittest.mock import patch

from md2latex.cli import main


@patch("md2latex.cli.setup_logging")
def test_cli_converts_with_default_output(mock_logging, tmp_path: Path, capsys):
    src = tmp_path / "paper.md"
    src.write_text("# Chapter\n", encoding="utf-8")

    assert main([str(src)]) == 0

    out = tmp_path / "paper.tex"
    assert out.read_text(encoding="utf-8").startswith("\\chapter{Chapter}")
    assert str(out) in capsys.readouterr().out
    mock_logging.assert_called_once_with(None)


@patch("md2latex.cli.setup_logging")
def test_cli_explicit_output_and_log_level(mock_logging, tmp_path: Path):
    src = tmp_path / "paper.md"
    src.write_text("text\n", encoding="utf-8")
    dst = tmp_path / "custom.tex"

    assert main([str(src), str(dst), "--log-level", "debug"]) == 0
    assert dst.exists()
    mock_logging.assert_called_once_with("debug")


@patch("md2latex.cli.setup_logging")
def test_cli_reports_io_errors(mock_logging, tmp_path: Path):
    assert main([str(tmp_path / "nope.md")]) == 1
    assert not (tmp_path / "nope.tex").exists()


@patch("md2latex.cli.setup_logging")
def test_cli_rejects_undecodable_input(mock_logging, tmp_path: Path):
    src = tmp_path / "latin1.md"
    src.write_bytes(b"caf\xe9\n")
    assert main([str(src)]) == 1
