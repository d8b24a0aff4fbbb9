import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .config import BuilderConfig, BuilderConfigError
from .query import EsQueryBuilder

logger = logging.getLogger(__name__)


load_dotenv()


def create_app(
    config_name: str = "local", builder_config: Optional[BuilderConfig] = None
) -> Flask:
    app = Flask(__name__)
    # keep the key order of built queries in JSON responses
    app.json.sort_keys = False
    if config_name == "local":
        logger.setLevel(logging.DEBUG)

    # one builder per app, shared across requests
    if builder_config is None:
        builder_config = BuilderConfig.from_environment()
    app.extensions["query_builder"] = EsQueryBuilder(builder_config)
    logger.info(
        "Query builder configured with %d query fields and %d filter fields",
        len(builder_config.query_fields),
        len(builder_config.filter_fields),
    )

    from .commands import register_commands
    from .routes import register_routes

    register_routes(app)
    register_commands(app)

    return app


__all__ = [
    "BuilderConfig",
    "BuilderConfigError",
    "EsQueryBuilder",
    "create_app",
]
