from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..analytics.aggregation import daily_utilization_for_user, search_records
from ..common.datetime_utils import now_utc_iso, require_iso_date
from ..common.http import json_body
from ..common.validators import require_identifier
from ..container import Container
from .catalog import FREQUENCIES, TASKS_WITH_TIME, TEAMS, time_study_table

_EXPORT_FIELDS = [
    "completedDate",
    "userName",
    "processName",
    "team",
    "frequency",
    "totalUtilization",
    "count",
    "actualVolume",
    "actualUtilizationUserInput",
    "remarks",
]


def register(app: Flask, container: Container) -> None:
    def _write_records_csv(records, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=_EXPORT_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for r in records:
            writer.writerow(r.to_dict())

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def health():
        return jsonify({"status": "ok", "timestamp": now_utc_iso()}), 200

    @app.route("/api/catalog", methods=["GET"], endpoint="api_catalog")
    def catalog():
        return jsonify(
            {
                "tasks": [{"name": t.name, "time": t.time, "isRuntime": t.is_runtime} for t in TASKS_WITH_TIME],
                "teams": list(TEAMS),
                "frequencies": list(FREQUENCIES),
                "timeStudy": time_study_table(),
            }
        ), 200

    @app.route("/api/data", methods=["GET"], endpoint="api_data")
    def bootstrap_data():
        container.user_service.ensure_default_admin()
        users = container.user_service.list_users()
        records = container.record_service.list_records()
        return jsonify(
            {
                "users": [u.to_public_dict() for u in users],
                "records": [r.to_dict() for r in records],
            }
        ), 200

    @app.route("/api/records", methods=["GET"], endpoint="api_records_list")
    def list_records():
        return jsonify([r.to_dict() for r in container.record_service.list_records()]), 200

    @app.route("/api/records", methods=["POST"], endpoint="api_records_create")
    def create_record():
        record = container.record_service.create_record(json_body())
        return jsonify(record.to_dict()), 201

    @app.route("/api/records", methods=["PUT"], endpoint="api_records_update")
    def update_record():
        record = container.record_service.update_record(json_body())
        return jsonify(record.to_dict()), 200

    @app.route("/api/records", methods=["DELETE"], endpoint="api_records_delete")
    def delete_record():
        body = json_body()
        container.record_service.delete_record(body.get("id"))
        return jsonify({"message": "Record deleted successfully"}), 200

    @app.route("/api/records/daily", methods=["GET"], endpoint="api_records_daily")
    def daily():
        user_id = require_identifier(request.args.get("userId"), "userId")
        month = request.args.get("month") or None
        rows = daily_utilization_for_user(container.record_service.list_records(), user_id, month)
        return jsonify([r.to_dict() for r in rows]), 200

    @app.route("/api/records/export.csv", methods=["GET"], endpoint="api_records_export")
    def export_csv():
        start = request.args.get("start") or None
        end = request.args.get("end") or None
        if start is not None:
            require_iso_date(start, "start")
        if end is not None:
            require_iso_date(end, "end")
        rows = search_records(container.record_service.list_records(), request.args.get("q", ""), start, end)
        suffix = f"_{start or 'all'}_{end or 'all'}".replace("-", "")
        return _write_records_csv(rows, f"production_records{suffix}.csv")
