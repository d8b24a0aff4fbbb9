from flask import Blueprint, jsonify, request

from .utils import get_query_builder

main = Blueprint("main", __name__)


@main.route("/api/query", methods=["GET"])
def build_query():
    """Preview the query body built for the `q` parameter."""
    query_string = request.args.get("q", "")
    query = get_query_builder().build(query_string)
    return jsonify({"q": query_string, "query": query})


@main.route("/api/tokens", methods=["GET"])
def tokenize_query():
    query_string = request.args.get("q", "")
    tokens = get_query_builder().tokenize(query_string)
    return jsonify({"q": query_string, "tokens": [t.to_dict() for t in tokens]})


def register_routes(app):
    app.register_blueprint(main)
