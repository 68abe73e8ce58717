from __future__ import annotations

from flask import Flask, jsonify, request

from ..analytics.aggregation import filter_users_by_role
from ..common.http import json_body
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def _role_param(value):
    if not value:
        return None
    try:
        return Role(value.upper())
    except ValueError:
        raise ValidationError(f"Unknown role: {value!r}")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def login():
        body = json_body()
        user = container.auth_service.authenticate(body.get("username", ""), body.get("password", ""))
        return jsonify(user.to_public_dict()), 200

    @app.route("/api/users", methods=["GET"], endpoint="api_users_list")
    def list_users():
        role = _role_param(request.args.get("role"))
        users = filter_users_by_role(container.user_service.list_users(), role)
        return jsonify([u.to_public_dict() for u in users]), 200

    @app.route("/api/users", methods=["POST"], endpoint="api_users_create")
    def create_user():
        user = container.user_service.create_user(json_body())
        return jsonify(user.to_public_dict()), 201

    @app.route("/api/users", methods=["PUT", "PATCH"], endpoint="api_users_update")
    def update_user():
        user = container.user_service.update_user(json_body())
        return jsonify(user.to_public_dict()), 200

    @app.route("/api/users", methods=["DELETE"], endpoint="api_users_delete")
    def delete_user():
        body = json_body()
        removed = container.user_service.delete_user(body.get("id"))
        return jsonify({"message": "User deleted successfully", "deletedRecords": removed}), 200
