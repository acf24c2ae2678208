from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_date_for_backend, parse_iso_date
from ..common.responses import current_actor, error_response, login_required
from ..container import Container
from ..core.exceptions import NetworkError
from ..daily_targets.summary import summarize_achievements
from .model import ReportDraft

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _date_arg(value) -> str:
        # The form opens on today's date unless the user picked another one.
        if value is None or not str(value).strip():
            return container.clock().date().isoformat()
        return format_date_for_backend(str(value))

    @app.route("/api/hourly-report/sessions", methods=["GET"], endpoint="hourly_sessions")
    @login_required
    def sessions():
        try:
            report_date = _date_arg(request.args.get("date"))
            snapshot = container.trackers.get(current_actor(), report_date).tick()
            return jsonify({"success": True, **snapshot.to_dict()}), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/hourly-report/draft", methods=["GET"], endpoint="hourly_draft")
    @login_required
    def draft():
        actor = current_actor()
        try:
            report_date = _date_arg(request.args.get("date"))
            report_draft = ReportDraft.for_date(parse_iso_date(report_date), container.scheduler.periods)

            warnings = []
            projects = []
            try:
                projects = list(container.projects_repo.list_assigned(token=actor.token))
            except NetworkError as e:
                logger.warning("Assigned projects unavailable for %s: %s", actor.employee_id, e)
                warnings.append(f"Assigned projects could not be loaded: {e}")
            if projects:
                report_draft.header.apply_project(projects[0])

            snapshot = container.trackers.get(actor, report_date).tick()
            return jsonify(
                {
                    "success": True,
                    "draft": report_draft.to_json(),
                    "projects": [p.to_dict() for p in projects],
                    "sessions": snapshot.to_dict(),
                    "warnings": warnings,
                }
            ), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/hourly-report/<report_date>", methods=["GET"], endpoint="hourly_list")
    @login_required
    def list_reports(report_date: str):
        try:
            report_date = format_date_for_backend(report_date)
            tracker = container.trackers.get(current_actor(), report_date)
            tracker.refresh()
            return jsonify([r.to_dict() for r in tracker.existing_reports]), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/hourly-report", methods=["POST"], endpoint="hourly_create")
    @login_required
    def create():
        data = request.get_json(silent=True) or {}
        try:
            report_draft = ReportDraft.from_json(data, container.scheduler.periods)
            result = container.submission_coordinator.submit(
                actor=current_actor(),
                draft=report_draft,
                period_label=str(data.get("timePeriod") or ""),
            )
            return jsonify({"success": True, **result.to_dict(), "draft": report_draft.to_json()}), 201
        except Exception as e:
            return error_response(e)

    @app.route("/api/hourly-report/<int:report_id>", methods=["PUT"], endpoint="hourly_update")
    @login_required
    def update(report_id: int):
        data = request.get_json(silent=True) or {}
        try:
            report_draft = ReportDraft.from_json(data, container.scheduler.periods)
            result = container.submission_coordinator.edit(
                actor=current_actor(),
                report_id=report_id,
                draft=report_draft,
                period_label=str(data.get("timePeriod") or ""),
            )
            return jsonify({"success": True, **result.to_dict()}), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/hourly-report/summary", methods=["POST"], endpoint="hourly_summary")
    @login_required
    def summary():
        data = request.get_json(silent=True) or {}
        try:
            report_draft = ReportDraft.from_json(data, container.scheduler.periods)
            text = summarize_achievements(report_draft.achievement_contributions())
            return jsonify({"success": True, "summary": text}), 200
        except Exception as e:
            return error_response(e)
