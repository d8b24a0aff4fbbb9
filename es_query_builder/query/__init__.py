"""Query string tokenizing and parsing."""

from .builder import EsQueryBuilder
from ..constants import DEFAULT_WILDCARD_FIELD
from .parser import Parser
from .token import Token, TokenKind
from .tokenizer import Tokenizer

__all__ = [
    "DEFAULT_WILDCARD_FIELD",
    "EsQueryBuilder",
    "Parser",
    "Token",
    "TokenKind",
    "Tokenizer",
]
