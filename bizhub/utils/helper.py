from datetime import datetime, timezone
from flask import current_app, request


def utcnow():
    """Naive UTC timestamp, matching what the DateTime columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_store():
    return current_app.extensions["store"]


def get_json():
    return request.get_json(silent=True) or {}


def isoformat(value):
    return value.isoformat() if value else None
