from __future__ import annotations

import logging
from datetime import datetime

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_timestamp
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import CheckInResult
from ..core.exceptions import (
    DataIntegrityError,
    LocationUnavailableError,
    OutOfRangeError,
    StoreError,
    ValidationError,
)
from ..container import Container
from ..geofence.model import GeoPoint

logger = logging.getLogger(__name__)


def _error(status: int, error: str, message: str, **extra):
    body = {"success": False, "error": error, "message": message}
    body.update(extra)
    return jsonify(body), status


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.errorhandler(ValidationError)
    def handle_validation(e: ValidationError):
        return _error(400, "validation_error", str(e))

    @app.errorhandler(OutOfRangeError)
    def handle_out_of_range(e: OutOfRangeError):
        return _error(
            403,
            "out_of_range",
            "You are not within range of the office.",
            distance_m=round(e.distance_m, 2),
            radius_m=e.radius_m,
        )

    @app.errorhandler(LocationUnavailableError)
    def handle_location(e: LocationUnavailableError):
        return _error(503, "location_unavailable", "Please enable location services to proceed.")

    @app.errorhandler(DataIntegrityError)
    def handle_integrity(e: DataIntegrityError):
        return _error(409, "integrity_error", str(e))

    @app.errorhandler(StoreError)
    def handle_store(e: StoreError):
        return _error(500, "store_error", "Could not save attendance. Please try again.")

    @app.route("/api/checkin", methods=["POST"], endpoint="api_checkin")
    def api_checkin():
        """Check a device in from the coordinates its client reported."""
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")

        point = GeoPoint.parse(data.get("latitude"), data.get("longitude"))
        time_s = data.get("time")
        if time_s is not None and not isinstance(time_s, str):
            raise ValidationError("time must be a 'YYYY-MM-DD HH:MM:SS' string")
        now: datetime | None = parse_timestamp(time_s, service.tz_name) if time_s else None

        outcome = service.check_in(data.get("device_id", ""), point, now=now)
        status = 201 if outcome.result == CheckInResult.INSERTED else 200
        return jsonify({"success": True, **outcome.to_dict()}), status

    @app.route("/api/devices/<device_id>/records", methods=["GET"], endpoint="api_device_records")
    def api_device_records(device_id: str):
        date_s = request.args.get("date")
        work_date = parse_iso_date(date_s) if date_s else None
        records = service.records_for_day(device_id, work_date)
        return jsonify({"success": True, "records": [r.to_dict() for r in records]})

    @app.route("/api/devices/<device_id>/history", methods=["GET"], endpoint="api_device_history")
    def api_device_history(device_id: str):
        try:
            limit = int(request.args.get("limit", DEFAULT_HISTORY_LIMIT))
        except ValueError:
            raise ValidationError("limit must be an integer")
        records = service.history(device_id, limit=limit)
        return jsonify({"success": True, "records": [r.to_dict() for r in records]})

    @app.route("/api/geofence", methods=["GET"], endpoint="api_geofence")
    def api_geofence():
        return jsonify({"success": True, "geofence": service.geofence.describe()})
