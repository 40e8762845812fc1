"""Tests for the global line index."""

import pytest

from lineseek.config.settings import Settings
from lineseek.core.cache import ChunkCache
from lineseek.core.line_index import LineIndex
from lineseek.core.loader import ChunkLoader
from lineseek.exceptions import ChunkIndexOutOfRangeError
from lineseek.models.position import Position


CHUNK_SIZES = [1, 2, 3, 7, 16, 1024]


@pytest.fixture
def open_index(make_file):
    """Build (loader, index, cache) for some bytes and chunk size."""
    loaders = []

    def _open(data: bytes, chunk_size: int, capacity: int = 2):
        loader = ChunkLoader(make_file(data), chunk_size=chunk_size)
        loaders.append(loader)
        index = LineIndex.build(loader, show_progress=False)
        return loader, index, ChunkCache(loader, capacity=capacity)

    yield _open
    for loader in loaders:
        loader.close()


class TestBuild:
    @pytest.mark.parametrize("chunk_size", CHUNK_SIZES)
    def test_end_matches_oracle(self, open_index, sample_text, forward_oracle, chunk_size):
        _, index, _ = open_index(sample_text, chunk_size)
        assert index.end == forward_oracle(sample_text)

    @pytest.mark.parametrize("chunk_size", CHUNK_SIZES)
    def test_chunk_starts_match_oracle(self, open_index, sample_text, forward_oracle, chunk_size):
        loader, index, _ = open_index(sample_text, chunk_size)
        assert index.chunk_count == loader.chunk_count()
        for idx, start in enumerate(index.chunk_starts):
            offset, _ = loader.chunk_range(idx)
            assert start == forward_oracle(sample_text[:offset])

    @pytest.mark.parametrize(
        "data, line_count",
        [
            (b"", 0),
            (b"a", 1),
            (b"\n", 1),
            (b"a\nb", 2),
            (b"a\nb\n", 2),
            (b"\n\n\n", 3),
        ],
    )
    def test_line_count(self, open_index, data, line_count):
        _, index, _ = open_index(data, 2)
        assert index.line_count == line_count

    def test_empty_file(self, open_index):
        _, index, cache = open_index(b"", 4)
        assert index.chunk_count == 0
        assert index.end == Position(0, 0)
        assert index.get_line(0, cache) is None

    def test_build_keeps_no_payload_resident(self, make_file, sample_text):
        with ChunkLoader(make_file(sample_text), chunk_size=8) as loader:
            seen = []
            original = loader.load_chunk

            def tracking_load(idx):
                chunk = original(idx)
                seen.append(chunk)
                return chunk

            loader.load_chunk = tracking_load
            LineIndex.build(loader, show_progress=False)
        assert seen
        assert all(not chunk.is_loaded for chunk in seen)

    def test_progress_bar_advances_per_chunk(self, make_file, sample_text, dummy_progress):
        with ChunkLoader(make_file(sample_text), chunk_size=10) as loader:
            LineIndex.build(loader, show_progress=True)
            expected = loader.chunk_count()
        assert len(dummy_progress) == 1
        bar = dummy_progress[0]
        assert bar.total == expected
        assert bar.completed == expected
        assert bar.finished

    def test_progress_default_from_settings(self, make_file, sample_text, dummy_progress):
        settings = Settings(show_progress=False)
        with ChunkLoader(make_file(sample_text), chunk_size=10, settings=settings) as loader:
            LineIndex.build(loader)
        assert dummy_progress == []


class TestLookups:
    @pytest.mark.parametrize("chunk_size", CHUNK_SIZES)
    def test_every_line_round_trips(self, open_index, sample_text, line_oracle, chunk_size):
        _, index, cache = open_index(sample_text, chunk_size)
        expected = line_oracle(sample_text)
        assert index.line_count == len(expected)
        assert [index.get_line(row, cache) for row in range(index.line_count)] == expected

    def test_line_spanning_many_chunks(self, open_index):
        data = b"short\n" + b"L" * 40 + b"\nend"
        _, index, cache = open_index(data, 3, capacity=1)
        assert index.get_line(1, cache) == b"L" * 40 + b"\n"
        assert index.get_line(2, cache) == b"end"

    def test_random_access_order(self, open_index, sample_text, line_oracle):
        _, index, cache = open_index(sample_text, 5, capacity=1)
        expected = line_oracle(sample_text)
        for row in (6, 0, 3, 2, 5, 1, 4):
            assert index.get_line(row, cache) == expected[row]

    @pytest.mark.parametrize("row", [-1, 7, 100])
    def test_out_of_range_row_is_absent(self, open_index, sample_text, row):
        _, index, cache = open_index(sample_text, 4)
        assert index.get_line(row, cache) is None

    def test_locate(self, open_index):
        # chunks: "ab\nc" "d\nef" "gh"
        _, index, _ = open_index(b"ab\ncd\nefgh", 4)
        assert index.locate(0) == 0
        assert index.locate(1) == 0
        assert index.locate(2) == 1

    def test_locate_out_of_range(self, open_index):
        _, index, _ = open_index(b"ab\ncd\nefgh", 4)
        with pytest.raises(ChunkIndexOutOfRangeError):
            index.locate(3)

    def test_line_starting_on_chunk_boundary(self, open_index):
        # chunks: "ab\n" "cd\n" "ef"
        _, index, cache = open_index(b"ab\ncd\nef", 3)
        assert index.chunk_starts == [Position(0, 0), Position(1, 0), Position(2, 0)]
        assert index.locate(1) == 1
        assert index.get_line(1, cache) == b"cd\n"


class TestPositionOf:
    @pytest.mark.parametrize("chunk_size", [1, 3, 8])
    def test_every_offset_matches_oracle(self, open_index, sample_text, forward_oracle, chunk_size):
        _, index, cache = open_index(sample_text, chunk_size)
        for offset in range(len(sample_text) + 1):
            assert index.position_of(offset, cache) == forward_oracle(sample_text[:offset])

    @pytest.mark.parametrize("offset", [-1, 11])
    def test_out_of_range_offset(self, open_index, offset):
        _, index, cache = open_index(b"ab\ncd\nefgh", 4)
        with pytest.raises(ChunkIndexOutOfRangeError):
            index.position_of(offset, cache)
