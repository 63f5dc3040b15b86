"""
api.routes_export - /api/v1/users/<id>/export and health endpoints.
"""

from flask import Response, jsonify, request

from api import api_bp
from db import get_session
from services.export_service import ExportService


@api_bp.route("/health")
def api_health():
    return jsonify({"status": "ok"})


@api_bp.route("/users/<int:user_id>/export")
def api_export_user_data(user_id: int):
    """GET /api/v1/users/{id}/export?format=json|csv"""
    fmt = request.args.get("format", "json").strip().lower()
    if fmt not in ("json", "csv"):
        return jsonify({"error": f"unsupported format: {fmt}"}), 400

    session = get_session()
    try:
        if fmt == "csv":
            body = ExportService.as_csv(session, user_id)
            return Response(
                body,
                mimetype="text/csv",
                headers={"Content-Disposition":
                         f"attachment; filename=user_{user_id}_export.csv"},
            )
        return jsonify(ExportService.export(session, user_id))
    finally:
        session.close()
