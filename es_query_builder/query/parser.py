"""
Fold a token sequence into an Elasticsearch query body.

Note that "query" means two things here. The whole structure handed to the
search backend is a query, and it is made of a query hash (scored matching)
and a filter hash (boolean, non-scored matching):

    query = query hash + filter hash

Examples of outputs with the default wildcard field:
    - "hello world"
    {'bool': {'must': [{'match': {'_all': 'hello'}}, {'match': {'_all': 'world'}}]}}

    - "hello OR world"
    {'bool': {'should': [{'match': {'_all': 'hello'}}, {'match': {'_all': 'world'}}]}}

    - "tag:hello" with tag as a filter field
    {'filtered': {'query': {'match_all': {}}, 'filter': {'term': {'tag': 'hello'}}}}
"""

import re
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from ..config import field_set, nested_field_map, wildcard_field_names
from ..constants import DEFAULT_WILDCARD_FIELD
from .token import Token, TokenKind

Fields = Union[str, Sequence[str]]

WHITESPACE_PATTERN = re.compile(r"\s+", re.ASCII)


class Parser:
    def __init__(
        self,
        wildcard_fields: Fields = DEFAULT_WILDCARD_FIELD,
        hierarchy_fields: Iterable[str] = (),
        nested_fields: Optional[Mapping[str, Sequence[str]]] = None,
    ):
        """Parser for tokens produced by the Tokenizer.

        `wildcard_fields` is searched when a token has no field. A string
        produces `match` queries and a list of strings `multi_match` queries.
        Terms of `hierarchy_fields` ending with '/' also match descendants.
        `nested_fields` maps a nested path to the fields searched under it.
        """
        self.wildcard_fields = wildcard_field_names(wildcard_fields)
        self.hierarchy_fields = field_set("hierarchy_fields", hierarchy_fields)
        self.nested_fields = nested_field_map(nested_fields or {})

    def parse(self, tokens: Iterable[Token]) -> Optional[dict[str, Any]]:
        """Parse the tokens into a query body, or None when nothing is queried."""
        return self._connect_queries(self._build_queries(tokens))

    def _build_queries(self, tokens: Iterable[Token]) -> list[dict[str, Any]]:
        queries = []
        for group in self._split_by_or_token(tokens):
            query_tokens = []
            filter_tokens = []
            for token in group:
                match token.kind:
                    case TokenKind.QUERY:
                        query_tokens.append(token)
                    case TokenKind.FILTER:
                        filter_tokens.append(token)
                    case TokenKind.OR:
                        # groups never contain OR tokens
                        continue
            query_hash = self._build_query_hash(query_tokens)
            filter_hash = self._build_filter_hash(filter_tokens)
            queries.append(self._create_query(query_hash, filter_hash))
        return queries

    @staticmethod
    def _connect_queries(queries: list[dict[str, Any]]) -> Optional[dict[str, Any]]:
        if not queries:
            return None
        if len(queries) == 1:
            return queries[0]
        return {"bool": {"should": queries}}

    @staticmethod
    def _split_by_or_token(tokens: Iterable[Token]) -> list[list[Token]]:
        """Divide the tokens into groups separated by OR tokens.

        Empty groups are dropped, so leading, trailing and repeated ORs have
        no effect:

            [<Query>, <OR>, <OR>, <Query>, <Filter>]
            => [[<Query>], [<Query>, <Filter>]]
        """
        groups: list[list[Token]] = [[]]
        for token in tokens:
            if token.is_or:
                groups.append([])
            else:
                groups[-1].append(token)
        return [group for group in groups if group]

    @staticmethod
    def _create_query(
        query_hash: dict[str, Any], filter_hash: dict[str, Any]
    ) -> dict[str, Any]:
        if filter_hash:
            return {"filtered": {"query": query_hash, "filter": filter_hash}}
        return query_hash

    def _build_query_hash(self, query_tokens: list[Token]) -> dict[str, Any]:
        if not query_tokens:
            return {"match_all": {}}

        must = []
        must_not = []
        for token in query_tokens:
            queries = must_not if token.is_minus else must
            queries.append(self._build_token_query(token))

        if len(must) == 1 and not must_not:
            return must[0]

        bool_query = {}
        if must:
            bool_query["must"] = must
        if must_not:
            bool_query["must_not"] = must_not
        return {"bool": bool_query}

    def _build_token_query(self, token: Token) -> dict[str, Any]:
        if token.field is None:
            # When the field is not given or is not allowed, search the
            # wildcard fields and every nested path.
            queries = [self._match_query(self.wildcard_fields, token.term)]
            for path, fields in self.nested_fields.items():
                queries.append(self._nested_query(path, fields, token.term))
            if len(queries) == 1:
                return queries[0]
            return {"bool": {"should": queries}}

        namespace = token.field_namespace
        if namespace in self.nested_fields:
            return self._nested_query(
                namespace, self.nested_fields[namespace], token.term
            )

        return self._match_query(token.field, token.term)

    @staticmethod
    def _match_query(fields: Fields, term: str) -> dict[str, Any]:
        if isinstance(fields, str):
            return {"match": {fields: term}}
        return {"multi_match": {"fields": list(fields), "query": term}}

    def _nested_query(
        self, path: str, fields: Sequence[str], term: str
    ) -> dict[str, Any]:
        return {"nested": {"path": path, "query": self._match_query(fields, term)}}

    def _build_filter_hash(self, filter_tokens: list[Token]) -> dict[str, Any]:
        """Build a filter hash from filter tokens.

        A quoted term is split on whitespace and every word becomes its own
        term filter. When the field is a hierarchy field and the word ends
        with '/', it matches the tag itself and all of its descendants:

            'tag:"foo bar"'  => must:     [term foo, term bar]
            '-tag:foo'       => must_not: [term foo]
            'tag:foo/'       => should:   [prefix foo/, term foo]
            '-tag:foo/'      => must_not: [prefix foo/, term foo]
        """
        if not filter_tokens:
            return {}

        must = []
        should = []
        must_not = []
        for token in filter_tokens:
            for term in WHITESPACE_PATTERN.split(token.term):
                if not term:
                    continue
                if token.field in self.hierarchy_fields and term.endswith("/"):
                    filters = must_not if token.is_minus else should
                    filters.append({"prefix": {token.field: term.lower()}})
                    # exact match on the tag itself
                    filters.append({"term": {token.field: term[:-1].lower()}})
                else:
                    filters = must_not if token.is_minus else must
                    filters.append({"term": {token.field: term.lower()}})

        if len(must) == 1 and not should and not must_not:
            # a term filter is cached by default
            return must[0]

        bool_filter: dict[str, Any] = {}
        if must:
            bool_filter["must"] = must
        if should:
            bool_filter["should"] = should
        if must_not:
            bool_filter["must_not"] = must_not
        # a bool filter is not cached by default
        bool_filter["_cache"] = True
        return {"bool": bool_filter}
