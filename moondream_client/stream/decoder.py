"""FrameDecoder — turns a fragmented `data: {...}` byte stream into text chunks."""
import codecs
import json
import logging
from decimal import Decimal
from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable, Iterator

from moondream_client.constants import (
    MSG_CHUNK_DECODED,
    MSG_LINE_DISCARDED,
    MSG_STREAM_DECODE_ERROR,
    MSG_TRAILING_DISCARDED,
    STREAM_CHUNK_FIELD,
    STREAM_DATA_PREFIX,
    STREAM_ENCODING,
    STREAM_LINE_SEPARATOR,
)
from moondream_client.errors import StreamDecodeError

logger = logging.getLogger(__name__)


def parse_line(line: str) -> str | None:
    """Return the `chunk` text carried by one stream line, or None for noise."""
    stripped = line.strip()
    if not stripped.startswith(STREAM_DATA_PREFIX):
        return None
    try:
        # integers beside `chunk` may exceed the int digit limit
        record = json.loads(stripped[len(STREAM_DATA_PREFIX):], parse_int=Decimal)
    except (ValueError, RecursionError):
        return None
    match record.get(STREAM_CHUNK_FIELD) if isinstance(record, dict) else None:
        case str() as chunk:
            return chunk
        case _:
            return None


class FrameDecoder:
    """One decoding session: owns the line buffer for a single streamed response.

    Correctness depends only on the concatenation of the fed fragments, never
    on where the fragment boundaries fall. A multi-byte character split across
    two fragments is held by the incremental decoder until it completes.
    """

    def __init__(self) -> None:
        self._utf8 = codecs.getincrementaldecoder(STREAM_ENCODING)(errors="strict")
        self._buffer = ""

    @property
    def pending(self) -> str:
        return self._buffer

    def feed(self, fragment: bytes) -> list[str]:
        """Append one fragment; return the chunks of every line it completed."""
        try:
            self._buffer += self._utf8.decode(fragment)
        except UnicodeDecodeError as exc:
            raise StreamDecodeError(MSG_STREAM_DECODE_ERROR % exc) from exc

        chunks: list[str] = []
        while STREAM_LINE_SEPARATOR in self._buffer:
            line, self._buffer = self._buffer.split(STREAM_LINE_SEPARATOR, 1)
            match parse_line(line):
                case None:
                    if line.strip():
                        logger.debug(MSG_LINE_DISCARDED, line)
                case chunk:
                    logger.debug(MSG_CHUNK_DECODED, chunk)
                    chunks.append(chunk)
        return chunks

    def close(self) -> None:
        """End the session. Unterminated trailing text is dropped, never parsed."""
        match len(self._buffer):
            case 0:
                pass
            case n:
                logger.debug(MSG_TRAILING_DISCARDED, n)
        self._buffer = ""
        self._utf8.reset()


# ── pull / push adapters ──────────────────────────────────────────────────────


def iter_chunks(fragments: Iterable[bytes]) -> Iterator[str]:
    decoder = FrameDecoder()
    for fragment in fragments:
        yield from decoder.feed(fragment)
    decoder.close()


async def aiter_chunks(fragments: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Yield text chunks as each fragment arrives; errors from `fragments` propagate."""
    decoder = FrameDecoder()
    async for fragment in fragments:
        for chunk in decoder.feed(fragment):
            yield chunk
    decoder.close()


async def drain(fragments: AsyncIterable[bytes], on_chunk: Callable[[str], None]) -> None:
    """Invoke `on_chunk` once per chunk, in order. The callback is not kept."""
    async for chunk in aiter_chunks(fragments):
        on_chunk(chunk)
