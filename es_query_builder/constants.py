# Field searched when the query string names no (usable) field.
DEFAULT_WILDCARD_FIELD = "_all"

# Environment variable prefix for builder configuration.
ENV_PREFIX = "QUERY_BUILDER_"
