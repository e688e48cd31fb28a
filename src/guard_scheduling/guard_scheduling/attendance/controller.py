from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import AmbiguousShiftError, NotFoundError, ParseError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _parse_date(value: str | None) -> date:
        if not value:
            return date.today()
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValidationError("date phải có dạng YYYY-MM-DD")

    @app.route("/api/attendance/week", methods=["GET"], endpoint="api_attendance_week")
    def api_attendance_week():
        try:
            day = _parse_date(request.args.get("date"))
            rows = container.attendance_service.attendance_week(day)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400

        return jsonify({"success": True, "date": day.strftime("%Y-%m-%d"), "rows": [r.to_dict() for r in rows]})

    @app.route("/api/employees/<int:employee_id>/attendance", methods=["GET"], endpoint="api_employee_attendance")
    def api_employee_attendance(employee_id: int):
        try:
            day = _parse_date(request.args.get("date"))
            row = container.attendance_service.employee_week(employee_id, day)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404

        return jsonify({"success": True, "date": day.strftime("%Y-%m-%d"), "row": row.to_dict()})

    @app.route("/api/employees/<int:employee_id>/attendance/<day_s>", methods=["GET"], endpoint="api_employee_attendance_day")
    def api_employee_attendance_day(employee_id: int, day_s: str):
        try:
            day = _parse_date(day_s)
            result = container.attendance_service.employee_day(employee_id, day)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except ParseError as e:
            return jsonify({"success": False, "message": str(e), "kind": e.kind}), 422
        except AmbiguousShiftError as e:
            return jsonify({"success": False, "message": str(e), "shift_ids": e.shift_ids}), 409

        return jsonify(
            {
                "success": True,
                "date": day.strftime("%Y-%m-%d"),
                "scheduled": result is not None,
                "attendance": result.to_dict() if result else None,
            }
        )
