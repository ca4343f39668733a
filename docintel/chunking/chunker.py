"""Fixed-size, overlapping text windows for embedding."""

from collections.abc import Iterator


class Chunker:
    """Splits text into windows of chunk_size chars sharing chunk_overlap chars.

    Window n starts at n * (chunk_size - chunk_overlap). Every window except
    the last is exactly chunk_size long, and splitting stops once a window
    reaches the end of the text, so input shorter than chunk_size yields a
    single chunk. Dropping the first chunk_overlap characters of every window
    after the first reconstructs the input.
    """

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 200) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if not 0 <= chunk_overlap < chunk_size:
            raise ValueError("chunk_overlap must be >= 0 and smaller than chunk_size")
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @property
    def step(self) -> int:
        return self.chunk_size - self.chunk_overlap

    def split(self, text: str) -> list[str]:
        return [chunk for _, chunk in self.windows(text)]

    def windows(self, text: str) -> Iterator[tuple[int, str]]:
        """Yield (chunk_index, chunk) pairs in document order."""
        offset = 0
        index = 0
        while offset < len(text):
            end = offset + self.chunk_size
            yield index, text[offset:end]
            if end >= len(text):
                break
            index += 1
            offset += self.step
