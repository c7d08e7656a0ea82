from pathlib import Path
from unittest.mock import patch

import pytest

from md2latex.services.conversion_service import convert_file, derive_output_path


def test_derive_output_path_replaces_suffix():
    assert derive_output_path("notes/draft.md") == Path("notes/draft.tex")
    assert derive_output_path("README") == Path("README.tex")
    assert derive_output_path(Path("a/b.markdown"), suffix=".ltx") == Path("a/b.ltx")


def test_convert_file_writes_next_to_input(tmp_path: Path):
    src = tmp_path / "doc.md"
    src.write_text("## Title\n\nSee [`k`].\n", encoding="utf-8")

    out = convert_file(src)

    assert out == tmp_path / "doc.tex"
    latex = out.read_text(encoding="utf-8")
    assert "\\section{Title}" in latex
    assert "\\cite{k}" in latex


def test_convert_file_explicit_output(tmp_path: Path):
    src = tmp_path / "doc.md"
    src.write_text("Ünïcode & more\n", encoding="utf-8")
    target = tmp_path / "out" / "body.tex"
    target.parent.mkdir()

    assert convert_file(src, target) == target
    assert target.read_text(encoding="utf-8") == "Ünïcode \\& more\n\n"


def test_missing_input_raises_and_writes_nothing(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        convert_file(tmp_path / "missing.md")
    assert not (tmp_path / "missing.tex").exists()


def test_conversion_failure_leaves_no_partial_output(tmp_path: Path):
    src = tmp_path / "doc.md"
    src.write_text("text\n", encoding="utf-8")
    with patch(
        "md2latex.services.conversion_service.convert_markdown_to_latex",
        side_effect=RuntimeError("boom"),
    ):
        with pytest.raises(RuntimeError):
            convert_file(src)
    assert not (tmp_path / "doc.tex").exists()
