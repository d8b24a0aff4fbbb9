import pytest
from dotenv import load_dotenv

from es_query_builder import BuilderConfig, EsQueryBuilder, create_app

load_dotenv()


APP_BUILDER_CONFIG = BuilderConfig(
    query_fields=["title"],
    filter_fields=["tag", "user"],
    hierarchy_fields=["tag"],
)


@pytest.fixture(scope="session")
def app():
    """Flask app.

    One for the whole test session, with a fixed builder configuration"""
    app = create_app(builder_config=APP_BUILDER_CONFIG)
    yield app


@pytest.fixture
def client(app):
    yield app.test_client()


@pytest.fixture
def cli_runner(app):
    yield app.test_cli_runner()


@pytest.fixture
def builder() -> EsQueryBuilder:
    return EsQueryBuilder()
