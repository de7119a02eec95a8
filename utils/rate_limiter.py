# utils/rate_limiter.py
from flask import current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)


def init_limiter(app):
    limiter.init_app(app)


def mutating_limit():
    """Policy string for POST/PUT endpoints, e.g. "100 per 15 minutes"."""
    return current_app.config["RATE_LIMIT"]


def limit_mutations(view):
    return limiter.limit(mutating_limit)(view)
