# pagetree/api/v1/pages.py
from flask import current_app, request, jsonify
from pagetree.application.pages.create_page import create_page
from pagetree.application.pages.update_page import update_page
from pagetree.application.pages.queries import fetch_menu_pages, get_page
from pagetree.domain.menu import build_menu, mark_active, page_paths
from pagetree.normalizers.menu import normalize_menu
from pagetree.normalizers.page import normalize_page
from pagetree.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp # import the versioned blueprint


def _url_settings():
    return {
        "marketable_urls": current_app.config.get("MARKETABLE_URLS", True),
        "path_prefix": current_app.config.get("PAGES_PATH_PREFIX", "/pages"),
    }


def _path_of(page):
    """Public path of a stored page, drafts included."""
    return page_paths(fetch_menu_pages(), **_url_settings())[page.id]

# ------------------------
# Pages
# ------------------------

@v1_bp.route("/pages", methods=["POST"])
def create_page_route():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    page = create_page(data=data)

    return jsonify({
        "id": page.id,
        "slug": page.slug,
        "path": _path_of(page),
        "message": "Page created successfully"
    }), 201

@v1_bp.route("/pages/<page_id>", methods=["GET"])
def get_page_route(page_id):
    page = get_page(page_id)
    return jsonify(normalize_page(page, admin=True, path=_path_of(page)))

@v1_bp.route("/pages/<page_id>", methods=["PUT"])
def update_page_route(page_id):
    page = get_page(page_id)

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(page)

    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    try:
        page = update_page(page_id=page_id, data=data)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400

    return jsonify(normalize_page(page, admin=True, path=_path_of(page))), 200

# ------------------------
# Menu
# ------------------------

@v1_bp.route("/menu", methods=["GET"])
def get_menu():
    pages = fetch_menu_pages()
    menu = build_menu(pages, **_url_settings())

    current_id = request.args.get("current")
    active = None
    if current_id:
        current = next((page for page in pages if page.id == current_id), None)
        active = mark_active(menu, current)

    return jsonify({
        "items": normalize_menu(menu),
        "active_page_id": active.id if active else None,
    })
