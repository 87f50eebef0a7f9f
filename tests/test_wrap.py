"""Greedy word-wrap of ``write_text_at_with_wrap``.

Each word counts ``len(word) + 1``; a line is flushed when the next word
would overflow ``wrap``, and emission stops once Y passes ``max_y``.
"""

from __future__ import annotations

import pytest

from zplgen.services.zpl_generator import WrapResult, ZplGenerator
from zplgen.services.zpl_tokens import Justification, Orientation

FOX = "The quick brown fox"


def _line(x: int, y: int, text: str) -> str:
    return f"^FO{x},{y},0^AON^FH^FD{text}^FS"


class TestShortCircuits:
    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n"])
    def test_blank_emits_nothing(self, gen: ZplGenerator, value) -> None:
        result = gen.write_text_at_with_wrap(10, 100, value, 9, 30, 1000)
        assert result == WrapResult(gen, 100)
        assert gen.fragments == ()

    def test_fits_in_one_line(self, gen: ZplGenerator) -> None:
        result = gen.write_text_at_with_wrap(10, 100, "short one", 9, 30, 1000)
        assert result.ending_y == 100
        assert gen.fragments == (_line(10, 100, "short_20one"),)

    def test_result_carries_builder(self, gen: ZplGenerator) -> None:
        result = gen.write_text_at_with_wrap(10, 100, FOX, 9, 30, 1000)
        assert result.builder is gen
        builder, ending_y = result
        assert builder is gen and ending_y == 190


class TestGreedyWrap:
    def test_fox_four_lines(self, gen: ZplGenerator) -> None:
        result = gen.write_text_at_with_wrap(10, 100, FOX, 9, 30, 1000)
        assert result.ending_y == 190
        assert gen.fragments == (
            _line(10, 100, "The_20"),
            _line(10, 130, "quick_20"),
            _line(10, 160, "brown_20"),
            _line(10, 190, "fox_20"),
        )

    def test_packs_several_words_per_line(self, gen: ZplGenerator) -> None:
        gen.write_text_at_with_wrap(0, 0, "a b c d e f", 4, 10, 1000)
        assert gen.fragments == (
            _line(0, 0, "a_20b_20"),
            _line(0, 10, "c_20d_20"),
            _line(0, 20, "e_20f_20"),
        )

    def test_word_order_preserved(self, gen: ZplGenerator) -> None:
        text = "one two three four five six seven"
        gen.write_text_at_with_wrap(0, 0, text, 10, 10, 1000)
        joined = "".join(f.split("^FD")[1][:-3] for f in gen.fragments)
        assert joined.replace("_20", " ").split() == text.split()

    def test_overlong_word_gets_own_line(self, gen: ZplGenerator) -> None:
        result = gen.write_text_at_with_wrap(0, 0, "a extraordinarily b", 5, 10, 1000)
        assert gen.fragments == (
            _line(0, 0, "a_20"),
            _line(0, 10, "extraordinarily_20"),
            _line(0, 20, "b_20"),
        )
        assert result.ending_y == 20

    def test_orientation_and_justification_forwarded(self, gen: ZplGenerator) -> None:
        gen.write_text_at_with_wrap(
            50, 0, FOX, 9, 30, 1000, Orientation.ROTATE90, Justification.CENTER,
        )
        assert all(f.startswith("^FO0,") for f in gen.fragments)
        assert all("^FB710,1,0,C,0^AOR" in f for f in gen.fragments)


class TestVerticalLimit:
    def test_fox_cut_at_150(self, gen: ZplGenerator) -> None:
        result = gen.write_text_at_with_wrap(10, 100, FOX, 9, 30, 150)
        assert gen.fragments == (
            _line(10, 100, "The_20"),
            _line(10, 130, "quick_20"),
        )
        assert result.ending_y == 130

    def test_limit_equal_to_last_y_is_kept(self, gen: ZplGenerator) -> None:
        result = gen.write_text_at_with_wrap(10, 100, FOX, 9, 30, 190)
        assert len(gen.fragments) == 4
        assert result.ending_y == 190

    def test_first_advance_already_over(self, gen: ZplGenerator) -> None:
        result = gen.write_text_at_with_wrap(10, 100, FOX, 9, 30, 100)
        assert gen.fragments == (_line(10, 100, "The_20"),)
        assert result.ending_y == 100
