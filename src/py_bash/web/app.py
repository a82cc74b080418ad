"""Flask application factory for the py-bash HTTP API.

Every session owns its own interpreter (recall cursor and log) and its
own state, so sessions never share mutable data.  Endpoints:

- ``POST /api/sessions`` — start a session from the seed.
- ``GET /api/sessions/<id>`` — current transcript and working directory.
- ``DELETE /api/sessions/<id>`` — end a session.
- ``POST /api/sessions/<id>/execute`` — run ``{"command": "..."}``.
- ``POST /api/sessions/<id>/autocomplete`` — complete ``{"line": "..."}``.
- ``POST /api/sessions/<id>/recall/<prev|next>`` — walk the recall buffer.
- ``GET /api/sessions/<id>/log`` — the interpreter's recent log entries.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any

from flask import Flask, Response, abort, jsonify, request

from py_bash.bash import Bash
from py_bash.repl import DEFAULT_PREFIX, build_prompt
from py_bash.seed import DEFAULT_SEED, state_from_seed
from py_bash.state import SessionState

_HTTP_BAD_REQUEST = 400
_HTTP_CREATED = 201
_HTTP_NOT_FOUND = 404
_LOG_TAIL = 50
_HTTP_NO_CONTENT = 204

# Oldest sessions are dropped once this many are open.
DEFAULT_MAX_SESSIONS = 1000


@dataclass
class _Session:
    """One client's interpreter and current state."""

    bash: Bash
    state: SessionState


def _state_json(state: SessionState, prefix: str) -> dict[str, Any]:
    """Serialize a state for the client."""
    history: list[dict[str, str]] = []
    for entry in state.history:
        item = {"value": entry.value}
        if entry.cwd is not None:
            item["cwd"] = entry.cwd
        history.append(item)
    return {"cwd": state.cwd, "prompt": build_prompt(prefix, state.cwd), "history": history}


def create_app(
    seed: dict[str, Any] | None = None,
    *,
    prefix: str = DEFAULT_PREFIX,
    max_sessions: int = DEFAULT_MAX_SESSIONS,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        seed: Initial session data for every new session (the demo
            tree by default).
        prefix: Text shown before the prompt.
        max_sessions: How many sessions stay open; creating one more
            drops the oldest.

    Returns:
        A configured Flask application ready to serve.

    Raises:
        TypeError: If *seed* has the wrong shape.
        ValueError: If the seed's ``cwd`` is not a directory, or
            *max_sessions* is below 1.

    """
    if max_sessions < 1:
        msg = f"max_sessions must be at least 1, got {max_sessions}"
        raise ValueError(msg)
    initial = state_from_seed(seed if seed is not None else DEFAULT_SEED)
    sessions: dict[str, _Session] = {}

    app = Flask(__name__)

    def _session(session_id: str) -> _Session:
        session = sessions.get(session_id)
        if session is None:
            abort(_HTTP_NOT_FOUND, description=f"Unknown session: {session_id}")
        return session

    def _field(name: str) -> str | None:
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get(name), str):  # pyright: ignore[reportUnknownMemberType]
            return None
        return data[name]

    @app.errorhandler(_HTTP_NOT_FOUND)
    def not_found(error: Exception) -> tuple[Response, int]:  # pyright: ignore[reportUnusedFunction]
        description = getattr(error, "description", None) or "Not found"
        return jsonify({"error": description}), _HTTP_NOT_FOUND

    @app.route("/api/sessions", methods=["POST"])
    def create_session() -> tuple[Response, int]:  # pyright: ignore[reportUnusedFunction]
        """Start a session and return its id and initial state."""
        session_id = uuid.uuid4().hex
        while len(sessions) >= max_sessions:
            del sessions[next(iter(sessions))]
        sessions[session_id] = _Session(bash=Bash(), state=initial)
        body = {"id": session_id, **_state_json(initial, prefix)}
        return jsonify(body), _HTTP_CREATED

    @app.route("/api/sessions/<session_id>")
    def show_session(session_id: str) -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the session's transcript and working directory."""
        return jsonify(_state_json(_session(session_id).state, prefix))

    @app.route("/api/sessions/<session_id>", methods=["DELETE"])
    def delete_session(session_id: str) -> tuple[str, int]:  # pyright: ignore[reportUnusedFunction]
        """End a session and forget its state."""
        _session(session_id)
        del sessions[session_id]
        return "", _HTTP_NO_CONTENT

    @app.route("/api/sessions/<session_id>/execute", methods=["POST"])
    def execute(session_id: str) -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run a command line.

        Expects JSON body: ``{"command": "..."}``
        """
        session = _session(session_id)
        command = _field("command")
        if command is None:
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST
        session.state = session.bash.execute(command, session.state)
        return jsonify(_state_json(session.state, prefix))

    @app.route("/api/sessions/<session_id>/autocomplete", methods=["POST"])
    def complete(session_id: str) -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Complete the last token of a line.

        Expects JSON body: ``{"line": "..."}``; ``completion`` is null
        when there is no unambiguous match.
        """
        session = _session(session_id)
        line = _field("line")
        if line is None:
            return jsonify({"error": "Missing 'line' field"}), _HTTP_BAD_REQUEST
        return jsonify({"completion": session.bash.complete_line(line, session.state)})

    @app.route("/api/sessions/<session_id>/recall/<direction>", methods=["POST"])
    def recall(session_id: str, direction: str) -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Walk the recall buffer; ``value`` null means clear the input."""
        bash = _session(session_id).bash
        if direction == "prev":
            value = bash.get_prev_command() if bash.has_prev_command() else None
            return jsonify({"value": value, "available": value is not None})
        if direction == "next":
            value = bash.get_next_command() if bash.has_next_command() else None
            return jsonify({"value": value or "", "available": value is not None})
        return jsonify({"error": f"Unknown direction: {direction}"}), _HTTP_BAD_REQUEST

    @app.route("/api/sessions/<session_id>/log")
    def log(session_id: str) -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the most recent interpreter log lines."""
        entries = _session(session_id).bash.logger.tail(_LOG_TAIL)
        return jsonify({"log": [str(entry) for entry in entries]})

    return app


def main() -> None:
    """Run the web API development server.

    This is the ``py-bash-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
