"""Unit tests for the ChunkedFileReader class."""

import io

import pytest

from dirwalk.io.chunked_file_reader import ChunkedFileReader


class ShortReads(io.RawIOBase):
    """Binary stream returning at most ``limit`` bytes per read."""

    def __init__(self, data: bytes, limit: int) -> None:
        self._data = data
        self._limit = limit

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        size = self._limit if size < 0 else min(size, self._limit)
        chunk, self._data = self._data[:size], self._data[size:]
        return chunk


def test_basic_chunked_reading():
    data = b"Hello world! " * 1000
    chunks = list(ChunkedFileReader(io.BytesIO(data), chunk_size=4096))
    assert b"".join(chunks) == data
    assert len(chunks) == 4
    assert all(len(chunk) == 4096 for chunk in chunks[:-1])


def test_empty_file():
    assert list(ChunkedFileReader(io.BytesIO(b""))) == []


def test_default_chunk_size():
    data = b"x" * (ChunkedFileReader.DEFAULT_CHUNK_SIZE + 1)
    chunks = list(ChunkedFileReader(io.BytesIO(data)))
    assert [len(chunk) for chunk in chunks] == [ChunkedFileReader.DEFAULT_CHUNK_SIZE, 1]


@pytest.mark.parametrize("chunk_size", [0, -1])
def test_chunk_size_validation(chunk_size):
    with pytest.raises(ValueError, match="chunk_size must be positive"):
        ChunkedFileReader(io.BytesIO(b"test"), chunk_size=chunk_size)


def test_short_reads_passed_through():
    chunks = list(ChunkedFileReader(ShortReads(b"abcdefghij", limit=3), chunk_size=4))
    assert chunks == [b"abc", b"def", b"ghi", b"j"]


def test_reduce_chunks_repacks_short_reads():
    chunks = list(ChunkedFileReader(ShortReads(b"abcdefghij", limit=3), chunk_size=4, reduce_chunks=True))
    assert chunks == [b"abcd", b"efgh", b"ij"]


def test_iterator_protocol():
    reader = ChunkedFileReader(io.BytesIO(b"abc"), chunk_size=2)
    assert iter(reader) is reader
    assert next(reader) == b"ab"
    assert next(reader) == b"c"
    with pytest.raises(StopIteration):
        next(reader)


def test_real_file(tmp_path):
    path = tmp_path / "data.bin"
    data = bytes(range(256)) * 100
    path.write_bytes(data)
    with open(path, "rb") as f:
        assert b"".join(ChunkedFileReader(f, chunk_size=1000, reduce_chunks=True)) == data
