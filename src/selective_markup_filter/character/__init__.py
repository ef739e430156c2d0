"""Character layer: encoding detection and chunked text streams."""

from .encoding import (
    BOMDetector,
    DeclarationParser,
    DetectionMethod,
    EncodingDetector,
    EncodingResult,
    detect_encoding,
)
from .stream import InputType, iter_text_chunks

__all__ = [
    "BOMDetector",
    "DeclarationParser",
    "DetectionMethod",
    "EncodingDetector",
    "EncodingResult",
    "detect_encoding",
    "InputType",
    "iter_text_chunks",
]
