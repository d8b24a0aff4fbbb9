import logging
from typing import Any, Optional

from ..config import BuilderConfig
from .parser import Parser
from .token import Token
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)


class EsQueryBuilder:
    """Convert a query string into the corresponding Elasticsearch query body.

    Examples with query_fields={"title"} and filter_fields={"tag"}:

        builder.build("term")
        {'match': {'_all': 'term'}}

        builder.build("title:term")
        {'match': {'title': 'term'}}

        builder.build("tag:term")
        {'filtered': {'query': {'match_all': {}}, 'filter': {'term': {'tag': 'term'}}}}

        builder.build("unknown:term")
        {'match': {'_all': 'term'}}
    """

    def __init__(self, config: Optional[BuilderConfig] = None, **kwargs):
        """Either pass a BuilderConfig or its fields as keyword arguments."""
        if config is None:
            config = BuilderConfig(**kwargs)
        elif kwargs:
            raise TypeError("Cannot specify both config and keyword arguments")

        self.config = config
        self.tokenizer = Tokenizer(config.query_fields, config.filter_fields)
        self.parser = Parser(
            wildcard_fields=config.wildcard_fields,
            hierarchy_fields=config.hierarchy_fields,
            nested_fields=config.nested_fields,
        )

    @classmethod
    def from_environment(cls):
        return cls(BuilderConfig.from_environment())

    def tokenize(self, query_string: Optional[str]) -> list[Token]:
        return self.tokenizer.tokenize(query_string)

    def build(self, query_string: Optional[str]) -> Optional[dict[str, Any]]:
        """Build the query body for the query string, None if nothing to query."""
        query = self.parser.parse(self.tokenize(query_string))
        if query is None:
            logger.debug("Nothing to query in %r", query_string)
        return query
