# pagetree/api/frontend.py
from flask import Blueprint, jsonify
from pagetree.application.pages.render_page import render_page

frontend_bp = Blueprint("frontend", __name__)


@frontend_bp.route("/", methods=["GET"], defaults={"path": ""})
@frontend_bp.route("/<path:path>", methods=["GET"])
def show_page(path):
    """
    Public page view.

    "/" is the home page, "/pages/<slug>" works in both URL modes and
    any other path resolves only when marketable URLs are enabled.
    """
    return jsonify(render_page("/" + path))
