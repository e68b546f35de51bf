"""Tools for chunk-based binary file reading operations."""

from typing import BinaryIO, Iterator


class ChunkedFileReader:
    """Iterator-based chunked reader for binary files.

    This class provides a memory-efficient way to read files in chunks. By default
    each chunk is whatever a single read returned. With ``reduce_chunks`` enabled, reads
    are re-packed so that every chunk except the last one is exactly ``chunk_size``
    bytes long, which lets two readers over different files be compared chunk by chunk.

    Args:
        file_obj: An opened binary file object to read from.
        chunk_size: Maximum size of chunks in bytes. Must be positive.
            Defaults to 65536 (64 KB).
        reduce_chunks: Whether to re-pack short reads into full-size chunks.
            Defaults to False.

    Raises:
        ValueError: If chunk_size is not positive.

    Example:
        >>> import io
        >>> list(ChunkedFileReader(io.BytesIO(b"abcdefg"), chunk_size=3))
        [b'abc', b'def', b'g']
    """

    DEFAULT_CHUNK_SIZE = 65536  # 64 KB

    def __init__(self, file_obj: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE, reduce_chunks: bool = False) -> None:
        """Initialize the chunked reader with a file object and chunk size."""

        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        self._file: BinaryIO = file_obj
        self._chunk_size: int = chunk_size
        self._reduce_chunks: bool = reduce_chunks
        self._buffer: bytes = b""

    def __iter__(self) -> Iterator[bytes]:
        """Return self as iterator."""
        return self

    def __next__(self) -> bytes:
        """Get the next chunk of content.

        Returns:
            A non-empty bytes object of at most ``chunk_size`` bytes.

        Raises:
            StopIteration: When the end of the file is reached.
        """
        if not self._reduce_chunks:
            chunk: bytes = self._file.read(self._chunk_size)
            if not chunk:
                raise StopIteration
            return chunk

        while len(self._buffer) < self._chunk_size:
            chunk = self._file.read(self._chunk_size - len(self._buffer))
            if not chunk:
                break
            self._buffer += chunk

        if not self._buffer:
            raise StopIteration

        content = self._buffer[: self._chunk_size]  # noqa: E203
        self._buffer = self._buffer[self._chunk_size :]  # noqa: E203
        return content
