"""Flask microservice that exposes floor plan design sessions over HTTP."""

from __future__ import annotations

import logging
import math
from http import HTTPStatus
from typing import Any

import requests
from flask import Flask, jsonify, request

from config import Settings, load_settings
from designer.catalog import categories
from designer.logging.checkpoints import (
    reset_checkpoint_callback,
    set_checkpoint_callback,
)
from designer.progress import DesignProgress, DEFAULT_STEPS
from designer.room_types import NotFound, Room
from designer.session import DesignSession, SessionRegistry


def _error(message: str, status: HTTPStatus) -> tuple[Any, HTTPStatus]:
    return jsonify({"error": message}), status


def _room_response(session: DesignSession, result: Room | NotFound, status=HTTPStatus.OK):
    if isinstance(result, NotFound):
        return _error(result.message, HTTPStatus.NOT_FOUND)
    return (
        jsonify(
            {
                "room": result.as_dict(session.settings.grid_unit),
                "session": session.snapshot(),
            }
        ),
        status,
    )


def _number(payload: dict[str, Any], key: str) -> float:
    value = payload.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number.")
    if not math.isfinite(value):
        raise ValueError(f"'{key}' must be a finite number.")
    return float(value)


def create_app(settings: Settings | None = None) -> Flask:
    """Create and configure the Flask application."""
    settings = settings or load_settings()
    app = Flask(__name__)
    registry = SessionRegistry(settings)
    app.config["SESSION_REGISTRY"] = registry

    def _session_or_404(session_id: str) -> DesignSession | None:
        return registry.get(session_id)

    @app.after_request
    def _add_cors_headers(response):
        response.headers.setdefault("Access-Control-Allow-Origin", "*")
        response.headers.setdefault("Access-Control-Allow-Headers", "Content-Type")
        response.headers.setdefault(
            "Access-Control-Allow-Methods", "GET,POST,PATCH,DELETE,OPTIONS"
        )
        return response

    @app.errorhandler(ValueError)
    def _bad_request(exc: ValueError):
        return _error(str(exc), HTTPStatus.BAD_REQUEST)

    @app.get("/health")
    def health() -> Any:
        return {"status": "ok", "sessions": len(registry)}, HTTPStatus.OK

    @app.get("/catalog")
    def catalog() -> Any:
        return jsonify({"categories": [d.as_dict() for d in categories()]}), HTTPStatus.OK

    @app.post("/sessions")
    def open_session() -> Any:
        session = registry.create()
        return jsonify(session.snapshot()), HTTPStatus.CREATED

    @app.get("/sessions/<session_id>")
    def get_session(session_id: str) -> Any:
        session = _session_or_404(session_id)
        if session is None:
            return _error("Session not found.", HTTPStatus.NOT_FOUND)
        with session.lock:
            return jsonify(session.snapshot()), HTTPStatus.OK

    @app.delete("/sessions/<session_id>")
    def close_session(session_id: str) -> Any:
        if not registry.close(session_id):
            return _error("Session not found.", HTTPStatus.NOT_FOUND)
        return ("", HTTPStatus.NO_CONTENT)

    @app.post("/sessions/<session_id>/rooms")
    def add_room(session_id: str) -> Any:
        session = _session_or_404(session_id)
        if session is None:
            return _error("Session not found.", HTTPStatus.NOT_FOUND)
        payload = request.get_json(silent=True) or {}
        category = str(payload.get("category") or "").strip()
        if not category:
            return _error("The 'category' field is required.", HTTPStatus.BAD_REQUEST)
        with session.lock:
            room = session.add_room(category)
            return _room_response(session, room, HTTPStatus.CREATED)

    @app.patch("/sessions/<session_id>/rooms/<room_id>")
    def update_room(session_id: str, room_id: str) -> Any:
        session = _session_or_404(session_id)
        if session is None:
            return _error("Session not found.", HTTPStatus.NOT_FOUND)
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return _error("Expected a JSON object patch.", HTTPStatus.BAD_REQUEST)
        with session.lock:
            return _room_response(session, session.update_room(room_id, payload))

    @app.post("/sessions/<session_id>/rooms/<room_id>/duplicate")
    def duplicate_room(session_id: str, room_id: str) -> Any:
        session = _session_or_404(session_id)
        if session is None:
            return _error("Session not found.", HTTPStatus.NOT_FOUND)
        with session.lock:
            return _room_response(
                session, session.duplicate_room(room_id), HTTPStatus.CREATED
            )

    @app.delete("/sessions/<session_id>/rooms/<room_id>")
    def remove_room(session_id: str, room_id: str) -> Any:
        session = _session_or_404(session_id)
        if session is None:
            return _error("Session not found.", HTTPStatus.NOT_FOUND)
        with session.lock:
            if not session.remove_room(room_id):
                return _error(NotFound(room_id).message, HTTPStatus.NOT_FOUND)
            return jsonify(session.snapshot()), HTTPStatus.OK

    @app.post("/sessions/<session_id>/selection")
    def select_room(session_id: str) -> Any:
        session = _session_or_404(session_id)
        if session is None:
            return _error("Session not found.", HTTPStatus.NOT_FOUND)
        payload = request.get_json(silent=True) or {}
        room_id = payload.get("room_id")
        with session.lock:
            if not room_id:
                session.deselect()
                return jsonify(session.snapshot()), HTTPStatus.OK
            return _room_response(session, session.select_room(str(room_id)))

    @app.post("/sessions/<session_id>/drag")
    def drag(session_id: str) -> Any:
        session = _session_or_404(session_id)
        if session is None:
            return _error("Session not found.", HTTPStatus.NOT_FOUND)
        payload = request.get_json(silent=True) or {}
        action = str(payload.get("action") or "").strip().lower()

        with session.lock:
            if action == "begin":
                room_id = str(payload.get("room_id") or "")
                return _room_response(session, session.begin_drag(room_id))
            if action == "move":
                session.move_drag(_number(payload, "dx"), _number(payload, "dy"))
                return jsonify(session.snapshot()), HTTPStatus.OK
            if action == "commit":
                result = session.commit_drag()
                if result is None:
                    return _error("No drag in progress.", HTTPStatus.CONFLICT)
                return _room_response(session, result)
            if action == "cancel":
                session.cancel_drag()
                return jsonify(session.snapshot()), HTTPStatus.OK

        return _error(
            "The 'action' field must be one of begin, move, commit, cancel.",
            HTTPStatus.BAD_REQUEST,
        )

    @app.post("/sessions/<session_id>/zoom")
    def zoom(session_id: str) -> Any:
        session = _session_or_404(session_id)
        if session is None:
            return _error("Session not found.", HTTPStatus.NOT_FOUND)
        payload = request.get_json(silent=True) or {}
        direction = str(payload.get("direction") or "").strip().lower()
        actions = {
            "in": session.zoom_in,
            "out": session.zoom_out,
            "reset": session.reset_zoom,
        }
        if direction not in actions:
            return _error(
                "The 'direction' field must be one of in, out, reset.",
                HTTPStatus.BAD_REQUEST,
            )
        with session.lock:
            return jsonify({"scale": actions[direction]()}), HTTPStatus.OK

    @app.get("/sessions/<session_id>/metrics")
    def metrics(session_id: str) -> Any:
        session = _session_or_404(session_id)
        if session is None:
            return _error("Session not found.", HTTPStatus.NOT_FOUND)
        with session.lock:
            return jsonify(session.metrics().as_dict()), HTTPStatus.OK

    @app.route("/design/progress", methods=["POST", "OPTIONS"])
    def design_progress() -> Any:
        """Run the scripted progress to completion within this request.

        The run is synchronous and takes roughly one step delay per step.
        """
        if request.method == "OPTIONS":
            return ("", HTTPStatus.NO_CONTENT)

        payload = request.get_json(silent=True) or {}
        checkpoints: list[dict[str, Any]] = []
        callback_url = (payload.get("checkpoint_callback_url") or "").strip()

        def _emit_checkpoint(message: str, percent: int) -> None:
            checkpoints.append({"message": message, "progress": percent})
            if not callback_url:
                return
            try:
                requests.post(
                    callback_url,
                    json={"message": message, "progress": percent},
                    timeout=1,
                )
            except requests.RequestException:
                logging.debug("Unable to forward checkpoint update.", exc_info=True)

        progress = DesignProgress(DEFAULT_STEPS, step_delay=settings.progress_step_delay)
        token = set_checkpoint_callback(_emit_checkpoint)
        try:
            progress.run()
        finally:
            reset_checkpoint_callback(token)

        return (
            jsonify(
                {
                    "status": "done",
                    "progress": progress.percent,
                    "checkpoints": checkpoints,
                }
            ),
            HTTPStatus.OK,
        )

    return app


app = create_app()


if __name__ == "__main__":
    _settings = load_settings()
    app.run(host=_settings.host, port=_settings.port)
