"""Encoding detection for byte input.

Detection runs in sequence: byte order mark, XML declaration, HTML
``<meta charset>``, then the configured default. Only the head of the input is
inspected so detection works on the first chunk of a stream.
"""

import codecs
import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Dict, Optional

SNIFF_SIZE = 1024


class DetectionMethod(Enum):
    """Enumeration of encoding detection methods."""
    BOM = "bom"
    XML_DECLARATION = "xml_declaration"
    META_CHARSET = "meta_charset"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class EncodingResult:
    """Result of encoding detection.

    Attributes:
        encoding: Codec name usable with ``codecs.getincrementaldecoder``
        method: Detection method used
        bom_length: Number of leading bytes to skip before decoding
    """
    encoding: str
    method: DetectionMethod
    bom_length: int = 0


class BOMDetector:
    """Byte Order Mark (BOM) detection for the Unicode encodings."""

    BOM_PATTERNS: ClassVar[Dict[bytes, str]] = {
        codecs.BOM_UTF32_LE: "utf-32-le",
        codecs.BOM_UTF32_BE: "utf-32-be",
        codecs.BOM_UTF8: "utf-8",
        codecs.BOM_UTF16_LE: "utf-16-le",
        codecs.BOM_UTF16_BE: "utf-16-be",
    }

    def detect(self, data: bytes) -> Optional[EncodingResult]:
        """Detect encoding based on BOM, or None when there is none."""
        # UTF-32 LE starts with the UTF-16 LE mark, so longest patterns first
        for bom_bytes, encoding in sorted(
            self.BOM_PATTERNS.items(), key=lambda item: len(item[0]), reverse=True
        ):
            if data.startswith(bom_bytes):
                return EncodingResult(encoding, DetectionMethod.BOM, len(bom_bytes))
        return None


class DeclarationParser:
    """Parser for in-document encoding declarations."""

    XML_DECLARATION_PATTERN = re.compile(
        rb'<\?xml\s[^>]*?encoding\s*=\s*["\']([A-Za-z0-9._:-]+)["\']',
        re.IGNORECASE
    )
    META_CHARSET_PATTERN = re.compile(
        rb'<meta\s[^>]*?charset\s*=\s*["\']?([A-Za-z0-9._:-]+)',
        re.IGNORECASE
    )

    def parse(self, data: bytes) -> Optional[EncodingResult]:
        """Return the declared encoding when it names a known codec."""
        header = data[:SNIFF_SIZE]
        for pattern, method in (
            (self.XML_DECLARATION_PATTERN, DetectionMethod.XML_DECLARATION),
            (self.META_CHARSET_PATTERN, DetectionMethod.META_CHARSET),
        ):
            match = pattern.search(header)
            if match:
                declared = match.group(1).decode("ascii").lower()
                if _is_valid_encoding(declared):
                    return EncodingResult(declared, method)
        return None


def _is_valid_encoding(encoding: str) -> bool:
    try:
        codecs.lookup(encoding)
    except LookupError:
        return False
    else:
        return True


class EncodingDetector:
    """Run the detection stages in order and fall back to a default."""

    def __init__(self, default_encoding: str = "utf-8") -> None:
        if not _is_valid_encoding(default_encoding):
            raise LookupError(f"unknown encoding: {default_encoding}")
        self.default_encoding = default_encoding
        self.bom_detector = BOMDetector()
        self.declaration_parser = DeclarationParser()

    def detect(self, data: bytes) -> EncodingResult:
        return (
            self.bom_detector.detect(data)
            or self.declaration_parser.parse(data)
            or EncodingResult(self.default_encoding, DetectionMethod.FALLBACK)
        )


def detect_encoding(data: bytes, default_encoding: str = "utf-8") -> EncodingResult:
    """Detect the encoding of ``data`` (only its head is inspected).

    Examples:
        >>> detect_encoding(b'<?xml version="1.0" encoding="latin-1"?><a/>').encoding
        'latin-1'
        >>> detect_encoding(b'\\xef\\xbb\\xbf<a/>').bom_length
        3
    """
    return EncodingDetector(default_encoding).detect(data)
