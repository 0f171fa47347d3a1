from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_employee, login_required
from ..container import Container
from .guards import current_capabilities, require_permission
from .model import PermissionAction, PermissionModule


def register(app: Flask, container: Container) -> None:
    permissions = container.permission_service

    @app.route("/api/permissions/me", methods=["GET"], endpoint="permissions_me")
    @login_required
    def permissions_me():
        return jsonify({"role": current_employee().role.value, "permissions": current_capabilities().grouped()})

    @app.route("/api/permissions/<role>", methods=["GET"], endpoint="permissions_for_role")
    @login_required
    @require_permission(PermissionModule.SETTINGS, PermissionAction.VIEW)
    def permissions_for_role(role: str):
        return jsonify(permissions.grouped_for_role(role))

    @app.route("/api/permissions/<role>", methods=["PUT"], endpoint="permissions_update")
    @login_required
    @require_permission(PermissionModule.SETTINGS, PermissionAction.MANAGE_USERS)
    def permissions_update(role: str):
        body = request.get_json(silent=True) or {}
        updated = permissions.replace_for_role(role, body.get("permissions"))
        return jsonify({"success": True, "message": "Permissions updated successfully", "permissions": updated.grouped()})

    @app.route("/api/permissions/initialize", methods=["POST"], endpoint="permissions_initialize")
    @login_required
    @require_permission(PermissionModule.SETTINGS, PermissionAction.SYSTEM_CONFIGURATION)
    def permissions_initialize():
        permissions.initialize_defaults()
        return jsonify({"success": True, "message": "Default permissions initialized successfully"})
