from flask import jsonify

from src.workforce.workforce.core.enums import Role
from src.workforce.workforce.permissions.guards import require_roles


def test_require_roles(app, login):
    @app.route("/admin-only", endpoint="admin_only")
    @require_roles(Role.ADMIN)
    def admin_only():
        return jsonify({"ok": True})

    resp = login("user-2").get("/admin-only")
    assert resp.status_code == 403
    assert resp.get_json()["error"]["kind"] == "authorization_error"
    assert login("user-3").get("/admin-only").status_code == 200


def test_capabilities_loaded_once_per_request(login, container):
    reads = container.permissions_repo.reads
    login("user-1").get("/api/permissions/me")
    assert container.permissions_repo.reads == reads + 1
