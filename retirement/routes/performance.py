"""
Performance metrics route.

Endpoint
--------
GET /blackrock/challenge/v1/performance

Returns process uptime, current RSS memory usage and active thread count.
"""

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from retirement.utils.performance import collect_performance_snapshot

performance_bp = Blueprint("performance", __name__)


@performance_bp.route("/performance", methods=["GET"])
def get_performance() -> tuple[Response, int]:
    """
    Return a live performance snapshot.

    Response body::

        {
            "time":    "1970-01-01 HH:MM:SS.mmm",
            "memory":  "XXX.XX MB",
            "threads": integer
        }

    * **time** – process uptime rendered as an epoch-based timestamp.
    * **memory** – current process RSS (from :mod:`psutil`).
    * **threads** – active Python thread count (``threading.active_count()``).
    """
    return jsonify(collect_performance_snapshot()), 200
