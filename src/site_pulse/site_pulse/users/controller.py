from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.responses import current_actor, error_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or request.form
        username = str(data.get("username") or "")
        password = str(data.get("password") or "")
        remember = bool(data.get("remember_me"))

        try:
            actor = container.auth_service.authenticate(username, password)
        except Exception as e:
            return error_response(e)

        session.clear()
        session.permanent = remember
        app.permanent_session_lifetime = timedelta(days=7)
        session.update(actor.to_session())

        return jsonify(
            {
                "success": True,
                "message": "Login successful",
                "user": {
                    "id": actor.user_id,
                    "employeeId": actor.employee_id,
                    "name": actor.name,
                    "role": actor.role,
                },
            }
        ), 200

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        actor = current_actor()
        if actor is not None:
            container.trackers.drop(actor)
        session.clear()
        return jsonify({"success": True, "message": "Logged out"}), 200
