from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _parse_date(name: str, default: date | None = None) -> date:
        value = request.args.get(name)
        if not value:
            if default is None:
                raise ValidationError(f"Thiếu tham số {name}")
            return default
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError(f"{name} phải có dạng YYYY-MM-DD")

    def _site_id() -> int | None:
        value = request.args.get("site_id")
        if not value:
            return None
        if not value.isdigit():
            raise ValidationError("site_id phải là số nguyên")
        return int(value)

    @app.route("/api/schedules/week", methods=["GET"], endpoint="api_schedules_week")
    def api_schedules_week():
        try:
            day = _parse_date("date", date.today())
            rows = container.schedule_calendar_service.week_rows(day, site_id=_site_id())
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

        return jsonify({"success": True, "date": day.strftime("%Y-%m-%d"), "rows": [r.to_dict() for r in rows]})

    @app.route("/api/schedules/day", methods=["GET"], endpoint="api_schedules_day")
    def api_schedules_day():
        try:
            day = _parse_date("date", date.today())
            pairs = container.schedule_calendar_service.shifts_for_day(day, site_id=_site_id())
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

        return jsonify(
            {
                "success": True,
                "date": day.strftime("%Y-%m-%d"),
                "shifts": [
                    {
                        "shift_id": shift.shift_id,
                        "name": shift.name,
                        "site_id": shift.site_id,
                        "start_time": occ.start_time,
                        "end_time": occ.end_time,
                        "custom_time": occ.custom_time,
                    }
                    for shift, occ in pairs
                ],
            }
        )

    @app.route("/api/shifts/<int:shift_id>/occurrences", methods=["GET"], endpoint="api_shift_occurrences")
    def api_shift_occurrences(shift_id: int):
        try:
            start = _parse_date("start")
            end = _parse_date("end")
            occurrences = container.shift_service.occurrences(shift_id, start=start, end=end)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404

        return jsonify(
            {
                "success": True,
                "shift_id": shift_id,
                "occurrences": [
                    {
                        "date": o.day.strftime("%Y-%m-%d"),
                        "start_time": o.start_time,
                        "end_time": o.end_time,
                        "custom_time": o.custom_time,
                    }
                    for o in occurrences
                ],
            }
        )
