from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, Response, jsonify, request

from retirement.logging_setup import get_logger
from retirement.routes.parsing import (
    parse_profile,
    parse_raw_expense,
    parse_windows,
    require_list,
)
from retirement.services.return_service import (
    calculate_returns,
    compare_returns,
    default_tracks,
)

logger = get_logger(__name__)

returns_bp = Blueprint("returns", __name__)

PAYLOAD_ERRORS = (ValueError, TypeError, KeyError)


def _parse_returns_body(body: Dict[str, Any]) -> Dict[str, Any]:
    """
    Read ``age``, monthly ``wage``, ``inflation`` (percent), optional
    ``q`` / ``p`` / ``k`` windows and ``transactions``.
    """
    params: Dict[str, Any] = {"profile": parse_profile(body)}
    params.update(parse_windows(body))
    params["expenses"] = [
        parse_raw_expense(t, i) for i, t in enumerate(require_list(body, "transactions"))
    ]
    return params


def _handle(track_name: str | None) -> tuple[Response, int]:
    body: Dict[str, Any] | None = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({"error": "Invalid or missing JSON body."}), 400

    try:
        params = _parse_returns_body(body)
        if track_name is None:
            result = compare_returns(**params)
        else:
            result = calculate_returns(track=default_tracks()[track_name], **params)
    except PAYLOAD_ERRORS as exc:
        logger.warning("Rejected payload on %s: %s", request.path, exc)
        return jsonify({"error": str(exc)}), 422

    return jsonify(result.to_dict()), 200


#Endpoint: NPS returns
@returns_bp.route("/returns:nps", methods=["POST"])
def returns_nps() -> tuple[Response, int]:
    return _handle("nps")


#Endpoint: Index returns
@returns_bp.route("/returns:index", methods=["POST"])
def returns_index() -> tuple[Response, int]:
    return _handle("index")


#Endpoint: NPS vs Index comparison
@returns_bp.route("/returns:compare", methods=["POST"])
def returns_compare() -> tuple[Response, int]:
    return _handle(None)
