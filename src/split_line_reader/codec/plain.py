"""Identity codec for uncompressed text files."""

from split_line_reader.streams.stream import SeekableByteStream


class PlainTextDecoder:
    """Pass-through decoder: decoded bytes are the file bytes."""

    def __init__(self, stream: SeekableByteStream):
        self._stream = stream

    def readline(self, size: int = -1) -> bytes:
        return self._stream.readline(size)

    def seek(self, offset: int) -> None:
        self._stream.seek(offset)

    def close(self) -> None:
        self._stream.close()


class PlainTextCodec:
    """Uncompressed line-oriented text."""

    name = "plain"
    extensions = (".txt", ".log", ".csv", ".tsv", ".jsonl", ".ndjson")

    def create_decoder(self, stream: SeekableByteStream) -> PlainTextDecoder:
        return PlainTextDecoder(stream)
