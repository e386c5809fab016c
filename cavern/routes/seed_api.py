"""Seed management API routes.

Stores the active dungeon seed in the Flask session so later generate/gif
calls without an explicit seed reproduce the same dungeon.
"""
from flask import Blueprint, request, jsonify, session
import hashlib, random

bp_seed = Blueprint('seed_api', __name__)

# Seeds are kept in the signed 64-bit range
MAX_SEED = 2**63 - 1


def _random_seed():
    return random.randint(1, 1_000_000)


def coerce_seed(raw):
    """Turn an int, digit string or free-form string into a seed.

    Free-form strings hash through SHA-256 (first 8 bytes). Missing, blank
    and boolean values pick a random seed.
    """
    if raw is None or isinstance(raw, bool):
        return _random_seed()
    if isinstance(raw, int):
        return raw % MAX_SEED
    if not isinstance(raw, str) or not raw.strip():
        return _random_seed()
    text = raw.strip()
    if text.isdigit():
        return int(text) % MAX_SEED
    digest = hashlib.sha256(text.encode('utf-8')).digest()
    return int.from_bytes(digest[:8], 'big') % MAX_SEED


@bp_seed.route('/api/dungeon/seed', methods=['POST'])
def set_seed():
    """Set (or generate) the session dungeon seed.

    Body JSON (all optional):
      { "seed": <int|str|null>, "regenerate": <bool> }
    - If seed omitted or null => random seed.
    - If seed provided (int or string) => deterministic hashing.

    Response: { "seed": <int> }
    """
    data = request.get_json(silent=True) or {}
    provided = data.get('seed')
    if data.get('regenerate') and provided is None:
        seed = _random_seed()
    else:
        seed = coerce_seed(provided)
    session['dungeon_seed'] = seed
    return jsonify({"seed": seed})
