import json
from typing import Optional

import click
from flask import Blueprint

from .config import BuilderConfig, BuilderConfigError
from .query import EsQueryBuilder
from .utils import get_query_builder

query = Blueprint("query", __name__)


def register_commands(app):
    app.register_blueprint(query)


def _builder(from_env: bool) -> EsQueryBuilder:
    if not from_env:
        return get_query_builder()
    try:
        return EsQueryBuilder(BuilderConfig.from_environment())
    except BuilderConfigError as e:
        raise click.ClickException(f"Invalid query builder configuration: {e}")


@query.cli.command("build")
@click.argument("query_string")
@click.option("--indent", help="Indentation of the JSON output", type=int, default=2)
@click.option(
    "--from-env",
    is_flag=True,
    help="Re-read the builder configuration from the environment",
    default=False,
)
def build_query(query_string: str, indent: Optional[int] = 2, from_env: bool = False):
    """Print the query body built for QUERY_STRING as JSON.

    Prints `null` when there is nothing to query, e.g. for an empty string or
    a lone OR.
    """
    result = _builder(from_env).build(query_string)
    click.echo(json.dumps(result, indent=indent or None))


@query.cli.command("tokens")
@click.argument("query_string")
@click.option(
    "--from-env",
    is_flag=True,
    help="Re-read the builder configuration from the environment",
    default=False,
)
def tokenize_query(query_string: str, from_env: bool = False):
    """Print the tokens of QUERY_STRING, one JSON object per line."""
    for token in _builder(from_env).tokenize(query_string):
        click.echo(json.dumps(token.to_dict()))
