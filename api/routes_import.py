"""
api.routes_import - /api/v1/import endpoints.

GET  lists the input files found in the data directory.
POST runs the import and returns the full report.
"""

from flask import current_app, request, jsonify

from api import api_bp
from import_engine import ImportOptions, run_import, scan_files


def _data_dir():
    return current_app.config.get("CTDB_DATA_DIR")


@api_bp.route("/import/files", methods=["GET"])
def api_import_files():
    discovery = scan_files(_data_dir())
    return jsonify({
        "available": {t: info.to_dict() for t, info in discovery.available.items()},
        "missing": discovery.missing,
    })


@api_bp.route("/import", methods=["POST"])
def api_import_run():
    """
    POST /api/v1/import?mode=insert|update|upsert&truncate=0|1

    Query parameters may also be sent as form fields.
    """
    mode = request.values.get("mode")
    truncate = request.values.get("truncate")
    options = ImportOptions.from_values(mode, truncate)   # ValueError → 400

    report = run_import(options, data_dir=_data_dir())
    return jsonify(report.to_dict())
