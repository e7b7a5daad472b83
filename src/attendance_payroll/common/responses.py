from __future__ import annotations

from typing import Any

from flask import jsonify

from ..core.exceptions import DomainError

_STATUS_BY_KIND = {
    "NotFound": 404,
    "StorageFailure": 500,
    "ConcurrentUpdate": 409,
}


def status_for(error: DomainError) -> int:
    return _STATUS_BY_KIND.get(error.kind, 400)


def ok(message: str, data: Any = None, status: int = 200):
    body = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def fail(error: DomainError):
    return jsonify({"success": False, "message": str(error), "error": error.kind}), status_for(error)
