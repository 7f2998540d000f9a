"""Codec lookup by file extension."""

from pathlib import PurePath

from split_line_reader.codec.base import Codec
from split_line_reader.codec.framed_zstd import FramedZstdCodec
from split_line_reader.codec.plain import PlainTextCodec


class CodecRegistry:
    """Maps lower-cased file suffixes to codecs."""

    def __init__(self, codecs: list[Codec] | None = None):
        self._by_extension: dict[str, Codec] = {}
        for codec in codecs or []:
            self.register(codec)

    def register(self, codec: Codec) -> None:
        """Register codec for each of its extensions, replacing earlier entries."""
        for extension in codec.extensions:
            self._by_extension[extension.lower()] = codec

    def get_codec(self, path: str) -> Codec | None:
        """Return the codec for path's final suffix, or None if none matches."""
        suffix = PurePath(path).suffix.lower()
        if not suffix:
            return None
        return self._by_extension.get(suffix)

    def extensions(self) -> list[str]:
        return sorted(self._by_extension)


def default_registry() -> CodecRegistry:
    """Registry with every codec shipped in this package."""
    return CodecRegistry([PlainTextCodec(), FramedZstdCodec()])
