from flask import Blueprint, current_app, send_from_directory

pages_bp = Blueprint("pages", __name__)

PAGES = {
    "/": "login.html",
    "/register": "register.html",
    "/dashboard": "dashboard.html",
    "/date.html": "date.html",
}


def _serve_page(filename):
    return send_from_directory(current_app.config["PUBLIC_DIR"], filename)


def _make_view(filename):
    def view():
        return _serve_page(filename)
    return view


for _path, _filename in PAGES.items():
    pages_bp.add_url_rule(_path, endpoint=_filename.rsplit(".", 1)[0], view_func=_make_view(_filename))


@pages_bp.route("/uploads/<path:filename>")
def uploaded_file(filename):
    return send_from_directory(current_app.config["UPLOADS_DIR"], filename)
