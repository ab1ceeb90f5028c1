"""
Tests for reply chunking and display pacing.
Run with: python -m pytest tests/test_chunking.py -v
"""

import asyncio
from unittest.mock import patch

from blox_coach.chunking import apaced, chunk_text, needs_chunking, paced


class TestChunkText:

    def test_short_text_single_segment(self):
        assert chunk_text("hello", 100) == ["hello"]

    def test_empty_text_never_empty_list(self):
        assert chunk_text("", 10) == [""]

    def test_exact_size_single_segment(self):
        assert chunk_text("x" * 10, 10) == ["x" * 10]

    def test_greedy_paragraph_packing(self):
        a, b, c = "a" * 10, "b" * 10, "c" * 10
        text = f"{a}\n\n{b}\n\n{c}"
        assert chunk_text(text, 25) == [f"{a}\n\n{b}", c]

    def test_overflow_flushes_before_new_segment(self):
        a, b = "a" * 8, "b" * 8
        assert chunk_text(f"{a}\n\n{b}", 12) == [a, b]

    def test_oversized_paragraph_hard_split(self):
        text = "x" * 25
        assert chunk_text(text, 10) == ["x" * 10, "x" * 10, "x" * 5]

    def test_oversized_paragraph_between_small_ones(self):
        text = "aa\n\n" + "x" * 12 + "\n\nbb"
        assert chunk_text(text, 10) == ["aa", "x" * 10, "xx", "bb"]

    def test_segments_within_limit(self):
        paras = ["p" * n for n in (30, 45, 12, 60, 5, 33)]
        text = "\n\n".join(paras)
        for seg in chunk_text(text, 64):
            assert len(seg) <= 64

    def test_rejoin_reconstructs(self):
        paras = ["p" * n for n in (30, 45, 12, 60, 5, 33)]
        text = "\n\n".join(paras)
        assert "\n\n".join(chunk_text(text, 64)) == text

    def test_runs_of_newlines_split(self):
        assert chunk_text("aaaa\n\n\nbbbb", 6) == ["aaaa", "bbbb"]


class TestNeedsChunking:

    def test_by_chars(self):
        assert needs_chunking("x" * 11, max_chars=10, max_lines=99)

    def test_by_lines(self):
        assert needs_chunking("\n".join("x" * 17), max_chars=1000, max_lines=16)

    def test_short(self):
        assert not needs_chunking("short", max_chars=10, max_lines=3)


class TestPacing:

    def test_paced_sleeps_between_segments(self):
        with patch("blox_coach.chunking.time.sleep") as sleep:
            out = list(paced(["a", "b", "c"], 18))
        assert out == ["a", "b", "c"]
        assert sleep.call_count == 2
        sleep.assert_called_with(0.018)

    def test_paced_zero_delay(self):
        with patch("blox_coach.chunking.time.sleep") as sleep:
            assert list(paced(["a", "b"], 0)) == ["a", "b"]
        sleep.assert_not_called()

    def test_apaced(self):
        async def collect():
            return [s async for s in apaced(["a", "b"], 1)]

        assert asyncio.run(collect()) == ["a", "b"]
