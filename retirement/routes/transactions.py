from __future__ import annotations

from typing import Any, Dict, List

from flask import Blueprint, Response, jsonify, request

from retirement.logging_setup import get_logger
from retirement.routes.parsing import (
    parse_raw_expense,
    parse_transaction,
    parse_windows,
    require_field,
    require_list,
)
from retirement.services.summary_service import summarize
from retirement.services.temporal_service import resolve_overlays
from retirement.services.transaction_service import build_transactions, normalize_all
from retirement.services.validation_service import validate_transactions
from retirement.utils.financial import to_decimal

logger = get_logger(__name__)

transactions_bp = Blueprint("transactions", __name__)

PAYLOAD_ERRORS = (ValueError, TypeError, KeyError)


def _unprocessable(exc: Exception) -> tuple[Response, int]:
    logger.warning("Rejected payload on %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 422


#Endpoint: parse
@transactions_bp.route("/transactions:parse", methods=["POST"])
def parse_transactions() -> tuple[Response, int]:

    body = request.get_json(silent=True)
    # a bare list or {"expenses": [...]}
    expenses_raw = body.get("expenses") if isinstance(body, dict) else body
    if not isinstance(expenses_raw, list):
        return jsonify({"error": "'expenses' must be a list."}), 422

    try:
        expenses = [parse_raw_expense(e, i) for i, e in enumerate(expenses_raw)]
        result = build_transactions(expenses)
    except PAYLOAD_ERRORS as exc:
        return _unprocessable(exc)

    return jsonify(result.to_dict()), 200


#Endpoint: validator
@transactions_bp.route("/transactions:validator", methods=["POST"])
def validator_transactions() -> tuple[Response, int]:

    body: Dict[str, Any] | None = request.get_json(silent=True)
    if body is None:
        return jsonify({"error": "Invalid or missing JSON body."}), 400

    try:
        wage = to_decimal(require_field(body, "wage"))
        if wage <= 0:
            raise ValueError("'wage' must be a positive number.")
        transactions = [
            parse_transaction(t, i) for i, t in enumerate(require_list(body, "transactions"))
        ]
    except PAYLOAD_ERRORS as exc:
        return _unprocessable(exc)

    result = validate_transactions(transactions)
    return jsonify(result.to_dict()), 200


#Endpoint: filter (temporal constraints)
@transactions_bp.route("/transactions:filter", methods=["POST"])
def filter_transactions() -> tuple[Response, int]:
    body: Dict[str, Any] | None = request.get_json(silent=True)
    if body is None:
        return jsonify({"error": "Invalid or missing JSON body."}), 400

    try:
        windows = parse_windows(body)
        raw_list = require_list(body, "transactions")
        transactions = normalize_all(parse_raw_expense(t, i) for i, t in enumerate(raw_list))
    except PAYLOAD_ERRORS as exc:
        return _unprocessable(exc)

    result = resolve_overlays(transactions, **windows)
    return jsonify(result.to_dict()), 200


#Endpoint: summary
@transactions_bp.route("/transactions:summary", methods=["POST"])
def summary_transactions() -> tuple[Response, int]:
    body: Dict[str, Any] | None = request.get_json(silent=True)
    if body is None:
        return jsonify({"error": "Invalid or missing JSON body."}), 400

    try:
        raw_list: List[Any] = (body.get("transactions") or []) if isinstance(body, dict) else body
        if not isinstance(raw_list, list):
            raise ValueError("'transactions' must be a list.")
        transactions = [parse_transaction(t, i) for i, t in enumerate(raw_list)]
    except PAYLOAD_ERRORS as exc:
        return _unprocessable(exc)

    return jsonify(summarize(transactions).to_dict()), 200
