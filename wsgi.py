import os

from es_query_builder import create_app

application = create_app(
    config_name="production" if os.getenv("VCAP_APPLICATION") else "local"
)
