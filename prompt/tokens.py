"""
Token counting for rendered context.

The kitchen does not assume any particular model tokenizer. Callers pass a
``Tokenizer`` object or a plain ``(text) -> int`` function; without one the
counter falls back to a characters-per-token heuristic.
"""

import logging
import math
from typing import Callable, List, Optional, Union

from core.abstractions import Tokenizer
import config

logger = logging.getLogger(__name__)

CountTokens = Callable[[str], int]


class _FunctionTokenizer:
    """Adapts a plain counting function to the Tokenizer protocol"""

    def __init__(self, func: CountTokens):
        self._func = func

    def count_tokens(self, text: str) -> int:
        return self._func(text)


class TiktokenTokenizer:
    """Tokenizer backed by a tiktoken encoding"""

    def __init__(self, encoding):
        self._encoding = encoding

    def encode(self, text: str) -> List[int]:
        return self._encoding.encode(text)

    def count_tokens(self, text: str) -> int:
        return len(self._encoding.encode(text))


def tiktoken_tokenizer(encoding_name: str = None) -> TiktokenTokenizer:
    """
    Build a tiktoken-backed tokenizer.

    Args:
        encoding_name: tiktoken encoding (default from config)

    Returns:
        TiktokenTokenizer instance
    """
    import tiktoken

    encoding = tiktoken.get_encoding(encoding_name or config.TIKTOKEN_ENCODING)
    logger.debug(f"Using tiktoken encoding {encoding.name} for token counting")
    return TiktokenTokenizer(encoding)


class TokenCounter:
    """Helper class for counting tokens with fallback heuristic"""

    def __init__(
        self,
        tokenizer: Optional[Union[Tokenizer, CountTokens]] = None,
        use_tiktoken: bool = None,
        chars_per_token: int = None,
    ):
        """
        Initialize token counter.

        Args:
            tokenizer: Optional tokenizer object or counting function
            use_tiktoken: Whether to use tiktoken if no tokenizer provided
                (default from config)
            chars_per_token: Heuristic divisor (default from config)
        """
        if tokenizer is not None and not hasattr(tokenizer, "count_tokens"):
            tokenizer = _FunctionTokenizer(tokenizer)
        self.tokenizer = tokenizer
        self.chars_per_token = chars_per_token or config.CHARS_PER_TOKEN

        if use_tiktoken is None:
            use_tiktoken = config.USE_TIKTOKEN
        if self.tokenizer is None and use_tiktoken:
            self.tokenizer = tiktoken_tokenizer()

    def count_tokens(self, text: str) -> int:
        """
        Count tokens in text using tokenizer or heuristic fallback.

        Args:
            text: Text to count tokens for

        Returns:
            Token count

        Raises:
            Exception: Whatever the tokenizer raises; its costs are never guessed
        """
        if self.tokenizer is not None:
            return self.tokenizer.count_tokens(text)

        if not text:
            return 0

        # Heuristic: ~4 characters per token
        return math.ceil(len(text) / self.chars_per_token)

    __call__ = count_tokens


__all__ = [
    'CountTokens',
    'TokenCounter',
    'TiktokenTokenizer',
    'tiktoken_tokenizer',
]
