"""
api.routes_import - /api/v1/users/<id>/import endpoint.

Accepts an exported document via multipart file upload or raw request body.
"""

from __future__ import annotations

from flask import jsonify, request

import config
from api import api_bp
from import_engine import run_import


def _detect_format(filename: str | None) -> str:
    """?format= wins, then the upload's extension, then Content-Type, then JSON."""
    fmt = request.args.get("format", "").strip().lower()
    if fmt:
        return fmt
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[1].lower()
        if ext in config.IMPORT_FORMATS:
            return ext
    content_type = (request.content_type or "").lower()
    if "csv" in content_type:
        return "csv"
    return "json"


@api_bp.route("/users/<int:user_id>/import", methods=["POST"])
def api_import_user_data(user_id: int):
    """
    POST /api/v1/users/{id}/import?format=json|csv

    Multipart: field name 'file'
    Or: raw document as request body (application/json or text/csv).
    """
    filename = None
    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("file")
        if not f:
            return jsonify({"error": "no file in upload"}), 400
        filename = f.filename
        content = f.read()
    else:
        content = request.get_data()

    fmt = _detect_format(filename)
    if fmt not in config.IMPORT_FORMATS:
        return jsonify({"error": f"unsupported format: {fmt}"}), 400

    report = run_import(user_id, content, fmt)
    return jsonify(report.to_dict())
