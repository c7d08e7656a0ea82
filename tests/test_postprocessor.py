import pytest

from md2latex.core.converter.postprocessor import postprocess, postprocess_segments

SAMPLES = [
    r"\cite\{knuth\}",
    r"see \ref\{fig\_a\} and \cite\{my\_key\}",
    r"$a\_1 \& b$ and c\_d",
    r"\textbf{x\_y} costs 5\% \\\_",
    "$x$\n$y\\_2$ \\ref{a\\_b}",
    "",
]


def test_escaped_citation_braces_are_restored():
    assert postprocess(r"As in \cite\{knuth\}.") == r"As in \cite{knuth}."


def test_reference_label_underscores_are_restored():
    assert postprocess(r"see \ref\{fig\_a\}") == r"see \ref{fig_a}"


def test_citation_key_underscores_are_restored():
    assert postprocess(r"\cite\{my\_key\}") == r"\cite{my_key}"


def test_inline_math_is_unescaped_but_prose_is_not():
    assert postprocess(r"$a\_1 \& b$ and c\_d") == r"$a_1 & b$ and c\_d"


def test_math_does_not_span_lines():
    text = "$a\\_b\nc\\_d$"
    assert postprocess(text) == text


def test_unrelated_commands_are_untouched():
    text = r"\textbf{x\_y} costs 5\%"
    assert postprocess(text) == text


@pytest.mark.parametrize("text", SAMPLES)
def test_postprocess_is_idempotent(text):
    once = postprocess(text)
    assert postprocess(once) == once


def test_verbatim_segments_are_passed_through():
    segments = [
        ("see \\ref\\{a\\_b\\} ", False),
        ("$x\\%y$ \\ref{a\\_b}\n", True),
        ("and $c\\_d$", False),
    ]
    assert postprocess_segments(segments) == (
        "see \\ref{a_b} $x\\%y$ \\ref{a\\_b}\nand $c_d$"
    )
