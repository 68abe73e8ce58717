from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from .aggregation import build_overview
from .filters import OverviewFilter


def register(app: Flask, container: Container) -> None:
    @app.route("/api/overview", methods=["GET"], endpoint="api_overview")
    def overview():
        filters = OverviewFilter.from_params(
            start=request.args.get("start"),
            end=request.args.get("end"),
            team=request.args.get("team"),
            user_id=request.args.get("userId"),
        )
        report = build_overview(
            container.record_service.list_records(),
            container.user_service.list_users(),
            filters,
        )
        return jsonify(report.to_dict()), 200
