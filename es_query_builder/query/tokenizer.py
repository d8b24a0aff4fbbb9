"""
Split a query string into classified tokens.

Field prefixes are ASCII word characters and terms are separated by ASCII
whitespace, so a full-width space stays inside a term.

Supported lexemes:
- `hello`: a plain term
- `-hello`: a negated term
- `title:hello`: a term for an explicit field
- `"hello world"`: a quoted term, whitespace included
- `OR`: separator between alternative groups (case insensitive)
"""

import logging
import re
from typing import Iterable, Optional

from ..config import field_set
from .token import Token, TokenKind

logger = logging.getLogger(__name__)

QUERY_PATTERN = re.compile(
    r"""
    (?P<minus>-)?                     # minus
    (?:(?P<field>\w+):)?              # field prefix
    (?:
        "(?P<quoted>.*?)(?:(?<!\\)"|\Z)  # quoted term, lenient when unterminated
        |
        (?P<simple>\S+)               # single term
    )
    """,
    re.VERBOSE | re.DOTALL | re.ASCII,
)

OR_PATTERN = re.compile(r"OR", re.IGNORECASE)


class Tokenizer:
    """Tokenizer for query strings.

    `query_fields` lists the field prefixes that may target a scored query,
    `filter_fields` those that turn the token into a filter. Any other field
    prefix is dropped and the term falls back to the wildcard fields.
    """

    def __init__(
        self,
        query_fields: Iterable[str] = (),
        filter_fields: Iterable[str] = (),
    ):
        self.query_fields = field_set("query_fields", query_fields)
        self.filter_fields = field_set("filter_fields", filter_fields)

    def tokenize(self, query_string: Optional[str]) -> list[Token]:
        """Tokenize the query string, preserving left to right order.

        tokenize("hello OR tag:world")
        [Token(full='hello', kind=QUERY), Token(full='OR', kind=OR),
         Token(full='tag:world', kind=FILTER)]   # with 'tag' a filter field
        """
        if not query_string:
            return []

        tokens = []
        for match in QUERY_PATTERN.finditer(query_string):
            # a lone minus sign is not a term
            if match.group(0) == "-":
                continue
            tokens.append(self._create_token(match))

        logger.debug("Tokenized %r into %d tokens", query_string, len(tokens))
        return tokens

    def _create_token(self, match: re.Match) -> Token:
        full = match.group(0)
        field = match.group("field")
        quoted = match.group("quoted")
        term = quoted if quoted is not None else match.group("simple")

        if field in self.filter_fields:
            kind = TokenKind.FILTER
        elif OR_PATTERN.fullmatch(full):
            kind = TokenKind.OR
        else:
            kind = TokenKind.QUERY
            if field is not None and field not in self.query_fields:
                logger.debug("Discarding unknown field prefix %r", field)
                field = None

        return Token(
            full=full,
            minus=match.group("minus") is not None,
            field=field,
            term=term,
            kind=kind,
        )
