import os

from es_query_builder import create_app

# cloud.gov sets VCAP_APPLICATION
app = create_app(
    config_name="production" if os.getenv("VCAP_APPLICATION") else "local"
)

if __name__ == "__main__":
    app.run(debug=False, port=8080)
