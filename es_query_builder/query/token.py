from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class TokenKind(Enum):
    QUERY = "query"
    FILTER = "filter"
    OR = "or"


@dataclass(frozen=True)
class Token:
    """A single classified lexeme of a query string.

    `full` is the whole matched text including the minus sign and the field
    prefix. `field` is only set when the field prefix was accepted by the
    tokenizer for the token's kind.
    """

    full: str
    term: str
    kind: TokenKind
    minus: bool = False
    field: Optional[str] = None

    @property
    def field_namespace(self) -> str:
        """Part of the field before the first dot, or '' when there is none."""
        if self.field is None or "." not in self.field:
            return ""
        return self.field.split(".", 1)[0]

    @property
    def is_minus(self) -> bool:
        return self.minus

    @property
    def is_query(self) -> bool:
        return self.kind is TokenKind.QUERY

    @property
    def is_filter(self) -> bool:
        return self.kind is TokenKind.FILTER

    @property
    def is_or(self) -> bool:
        return self.kind is TokenKind.OR

    def to_dict(self) -> dict[str, Any]:
        return {
            "full": self.full,
            "minus": self.minus,
            "field": self.field,
            "term": self.term,
            "kind": self.kind.value,
        }
