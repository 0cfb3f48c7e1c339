#!/usr/bin/env python3
"""
GitPLM catalog - Reference catalog service
==========================================

Single-command run:  python main.py

Serves the /v1 catalog API consumed by catalog.CatalogClient, backed by
SQLite and seeded from the partmaster CSV directory when empty.
See config.py for all environment-variable tunables.
"""

import logging
from typing import Optional

from flask import Flask, jsonify

import config
from db import init_db, get_session, Part
from api import api_bp


def create_app(db_url: Optional[str] = None, token: Optional[str] = None) -> Flask:
    """Flask application factory."""

    app = Flask(__name__)
    app.config["API_TOKEN"] = config.API_TOKEN if token is None else token

    # ── Initialise database ─────────────────────────────────────────
    init_db(db_url or config.DB_URL)

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    @app.route("/health")
    def health():
        return "OK", 200

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(405)
    def _405(e):
        return jsonify({"error": "method not allowed"}), 405

    @app.errorhandler(500)
    def _500(e):
        return jsonify({"error": "internal server error"}), 500

    return app


def _seed_if_empty():
    """Auto-import the partmaster directory when the database is empty."""
    session = get_session()
    count = session.query(Part).count()
    session.close()

    if count > 0:
        print(f"\n  Database has {count} parts.")
        return

    from import_engine.csv_parser import find_csv_files
    if not find_csv_files(config.PM_DIR):
        print(f"\n  No partmaster CSVs in {config.PM_DIR} - starting empty.")
        return

    print(f"\n  Database empty → importing partmaster from {config.PM_DIR} …")
    from import_engine import import_directory

    report = import_directory(config.PM_DIR)

    print(f"  Done: {report.imported} parts from {report.files} files, "
          f"{report.skipped} skipped / {report.total_rows} rows")
    if report.errors:
        print(f"  First errors (max 10):")
        for err in report.errors[:10]:
            print(f"    {err['file']} row {err['row']}: {err['reason']}")


def main():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("=" * 56)
    print("  GitPLM - Catalog service")
    print("=" * 56)

    app = create_app()
    print(f"  Database: {config.DB_URL}")
    _seed_if_empty()

    print(f"\n  http://{config.HOST}:{config.PORT}/v1/")
    print(f"  Categories: /v1/categories.json")
    print(f"  Parts by category: /v1/parts/category/{{id}}.json")
    print(f"  Part detail: /v1/parts/{{id}}.json")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
