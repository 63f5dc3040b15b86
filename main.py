#!/usr/bin/env python3
"""
Booklovers - User library import / export service
==================================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

from __future__ import annotations

import json
import logging

from flask import Flask, jsonify

import config
from db import init_db, get_session, session_scope, Book
from api import api_bp
from services.book_service import BookService


def create_app(db_url: str | None = None) -> Flask:
    """Flask application factory."""

    app = Flask(__name__)
    app.secret_key = config.SECRET
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_UPLOAD_BYTES

    # ── Initialise database ─────────────────────────────────────────
    init_db(db_url or config.DB_URL)

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(500)
    def _500(e):
        return jsonify({"error": "internal server error"}), 500

    return app


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def _seed_if_empty():
    """Load the catalog seed JSON when the books table is empty."""
    session = get_session()
    count = session.query(Book).count()
    session.close()

    if count > 0:
        print(f"\n  Catalog has {count} books.")
        return

    if not config.CATALOG_SEED_PATH.exists():
        print(f"\n  No catalog seed at {config.CATALOG_SEED_PATH} - starting empty.")
        return

    print(f"\n  Catalog empty → seeding from {config.CATALOG_SEED_PATH.name} …")
    with open(config.CATALOG_SEED_PATH, encoding="utf-8") as fh:
        rows = json.load(fh)

    seeded = 0
    with session_scope() as session:
        for row in rows:
            BookService.create(session, row)
            seeded += 1
    print(f"  Done: {seeded} books seeded")


def main():
    _configure_logging()
    print("=" * 56)
    print("  Booklovers - Library import / export")
    print("=" * 56)

    app = create_app()
    print(f"  Database: {config.DB_URL}")
    _seed_if_empty()

    print(f"\n  http://{config.HOST}:{config.PORT}")
    print(f"  Import: POST /api/v1/users/<id>/import?format=json|csv")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
