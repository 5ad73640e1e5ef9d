"""Scrabble drill web application — Flask backend."""
from __future__ import annotations

import logging
import random
import sys
import uuid
from pathlib import Path

# Ensure project root is on sys.path so `rackdrill.*` imports work
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from flask import Flask, jsonify, request

from rackdrill.dictionary import AnagramIndex, load_default_dictionary
from rackdrill.distribution import Distribution, default_registry
from rackdrill.errors import ConfigurationError, MalformedWordError, UnavailableLetterError
from rackdrill.game import GameOptions, GameSession
from rackdrill.predicates import parse_predicates

logger = logging.getLogger(__name__)

app = Flask(__name__)

REGISTRY = default_registry()

# Word lists keyed by (distribution, word length), loaded on first use
INDEXES: dict[tuple[str, int], AnagramIndex] = {}

# Game state keyed by session UUID
GAMES: dict[str, GameSession] = {}


def _index_for(distribution: Distribution, word_length: int) -> AnagramIndex:
    key = (distribution.name, word_length)
    if key not in INDEXES:
        INDEXES[key] = load_default_dictionary(distribution, word_length=word_length)
    return INDEXES[key]


def _session_json(session_id: str, session: GameSession) -> dict:
    result = session.snapshot()
    result["session_id"] = session_id
    return result


def _get_game(data: dict) -> tuple[str, GameSession | None]:
    session_id = data.get("session_id", "")
    return session_id, GAMES.get(session_id)


@app.route("/distributions")
def distributions():
    return jsonify([
        {"name": d.name, "description": d.description, "tile_count": d.tile_count}
        for d in REGISTRY
    ])


@app.route("/start", methods=["POST"])
def start():
    data = request.get_json(silent=True) or {}
    try:
        distribution = REGISTRY.get(data.get("distribution", "french"))
        options = GameOptions(
            word_length=int(data.get("length", 7)),
            min_vowels=int(data.get("min_vowels", 0)),
            min_consonants=int(data.get("min_consonants", 0)),
            predicates=parse_predicates(str(data.get("predicates", ""))),
        )
        options.validate()
    except (ConfigurationError, ValueError, TypeError) as e:
        return jsonify({"error": str(e)}), 400

    try:
        index = _index_for(distribution, options.word_length)
    except (FileNotFoundError, MalformedWordError) as e:
        return jsonify({"error": str(e)}), 500

    seed = data.get("seed")
    rng = random.Random(seed) if seed is not None else None
    session = GameSession(distribution, index, options, rng=rng)
    session.draw_tiles()

    session_id = str(uuid.uuid4())
    GAMES[session_id] = session
    logger.info("session %s started with %r distribution", session_id, distribution.name)
    return jsonify(_session_json(session_id, session))


@app.route("/state/<session_id>")
def state(session_id: str):
    session = GAMES.get(session_id)
    if session is None:
        return jsonify({"error": "Session not found"}), 404
    return jsonify(_session_json(session_id, session))


@app.route("/draw", methods=["POST"])
def draw():
    data = request.get_json(silent=True) or {}
    session_id, session = _get_game(data)
    if session is None:
        return jsonify({"error": "Session not found"}), 404
    if session.is_finished():
        return jsonify({"error": "Game finished", "finished": True}), 200

    session.reject_draw(full=bool(data.get("full", False)))
    return jsonify(_session_json(session_id, session))


@app.route("/accept", methods=["POST"])
def accept():
    data = request.get_json(silent=True) or {}
    session_id, session = _get_game(data)
    if session is None:
        return jsonify({"error": "Session not found"}), 404

    session.accept_draw()
    return jsonify(_session_json(session_id, session))


@app.route("/play", methods=["POST"])
def play():
    data = request.get_json(silent=True) or {}
    session_id, session = _get_game(data)
    if session is None:
        return jsonify({"error": "Session not found"}), 404

    word = str(data.get("word", "")).strip()
    if not word:
        return jsonify({"error": "No word provided"}), 400
    check = bool(data.get("check", False))

    try:
        played = session.play_word(word, check_only=check)
    except UnavailableLetterError as e:
        return jsonify({"error": str(e), "letter": e.letter}), 400

    if check:
        return jsonify({"session_id": session_id, "valid": True})

    if not session.is_finished():
        session.draw_tiles()
    result = _session_json(session_id, session)
    result["played"] = [t.symbol for t in played]
    return jsonify(result)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, host="127.0.0.1", port=8080)
