"""Chunked character streams over heterogeneous inputs.

Tokenizers pull decoded text through ``iter_text_chunks`` so that documents
are never read into memory as a whole.
"""

import codecs
from pathlib import Path
from typing import BinaryIO, Generator, Iterator, TextIO, Union

from selective_markup_filter.shared.errors import MarkupSyntaxError

from .encoding import SNIFF_SIZE, EncodingDetector

# Type definitions for input data
InputType = Union[str, bytes, BinaryIO, TextIO, Path]


def iter_text_chunks(
    source: InputType,
    chunk_size: int = 8192,
    default_encoding: str = "utf-8"
) -> Generator[str, None, None]:
    """Yield decoded text chunks of about ``chunk_size`` characters.

    Args:
        source: Markup as string, bytes, path or file-like object. Strings are
            content, never file names; pass a ``Path`` to read a file.
        chunk_size: Read size in characters (bytes for binary input)
        default_encoding: Encoding used when byte input declares none

    Raises:
        MarkupSyntaxError: Byte input is not valid in its detected encoding
        TypeError: The source type is not supported
    """
    if isinstance(source, str):
        for start in range(0, len(source), chunk_size):
            yield source[start:start + chunk_size]
    elif isinstance(source, (bytes, bytearray)):
        yield from _decode_chunks(
            _iter_byte_slices(bytes(source), chunk_size), default_encoding
        )
    elif isinstance(source, Path):
        with source.open("rb") as file_obj:
            yield from _iter_file(file_obj, chunk_size, default_encoding)
    elif hasattr(source, "read"):
        yield from _iter_file(source, chunk_size, default_encoding)
    else:
        raise TypeError(f"Unsupported input type: {type(source).__name__}")


def _iter_byte_slices(data: bytes, chunk_size: int) -> Iterator[bytes]:
    for start in range(0, len(data), chunk_size):
        yield data[start:start + chunk_size]


def _iter_file(
    file_obj: Union[BinaryIO, TextIO], chunk_size: int, default_encoding: str
) -> Iterator[str]:
    head = file_obj.read(max(chunk_size, SNIFF_SIZE))
    if isinstance(head, str):
        while head:
            yield head
            head = file_obj.read(chunk_size)
        return

    def byte_chunks() -> Iterator[bytes]:
        chunk = head
        while chunk:
            yield chunk
            chunk = file_obj.read(chunk_size)

    yield from _decode_chunks(byte_chunks(), default_encoding)


def _decode_chunks(chunks: Iterator[bytes], default_encoding: str) -> Iterator[str]:
    detector = EncodingDetector(default_encoding)
    head = b""
    for chunk in chunks:
        head += chunk
        if len(head) >= SNIFF_SIZE:
            break

    result = detector.detect(head)
    decoder = codecs.getincrementaldecoder(result.encoding)()
    try:
        text = decoder.decode(head[result.bom_length:])
        if text:
            yield text
        for chunk in chunks:
            text = decoder.decode(chunk)
            if text:
                yield text
        text = decoder.decode(b"", final=True)
        if text:
            yield text
    except UnicodeDecodeError as e:
        raise MarkupSyntaxError(
            f"invalid {result.encoding} byte sequence: {e.reason}"
        ) from e
