"""Common plumbing for the streaming tokenizers."""

from typing import Generator, Optional

from selective_markup_filter.character import InputType, iter_text_chunks
from selective_markup_filter.shared import TokenizerConfig, get_logger

from .tokens import Token


class StreamingTokenizer:
    """Pull-based token cursor over a chunked character stream.

    Subclasses implement ``_next_token`` returning the next token or None at
    end of stream. Instances are single-pass iterators.
    """

    component = "tokenizer"

    def __init__(
        self,
        source: InputType,
        config: Optional[TokenizerConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or TokenizerConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, self.component)
        self.tokens_emitted = 0
        self.exhausted = False
        self._chunks: Generator[str, None, None] = iter_text_chunks(
            source, self.config.chunk_size, self.config.default_encoding
        )

    def __iter__(self) -> "StreamingTokenizer":
        return self

    def __next__(self) -> Token:
        if self.exhausted:
            raise StopIteration
        token = self._next_token()
        if token is None:
            self.exhausted = True
            self.logger.debug(
                "Token stream exhausted",
                extra={"tokens_emitted": self.tokens_emitted},
            )
            raise StopIteration
        self.tokens_emitted += 1
        return token

    def __enter__(self) -> "StreamingTokenizer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying source (closes files opened from a Path)."""
        self.exhausted = True
        self._chunks.close()

    def _read_chunk(self) -> Optional[str]:
        return next(self._chunks, None)

    def _next_token(self) -> Optional[Token]:
        raise NotImplementedError
