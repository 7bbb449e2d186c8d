"""JSON API routes for channel resolution and analytics reports."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request

from analytics.errors import ChannelAuditError
from web.services.audit_runner import clamp_max_results, resolve_channel, run_channel_audit
from web.services.serializers import error_to_response

api_bp = Blueprint("api", __name__)
logger = logging.getLogger(__name__)



def _error(exc: Exception):
    payload, status = error_to_response(exc)
    return jsonify(payload), status


@api_bp.get("/healthz")
def healthz():
    return jsonify({"status": "ok"})


@api_bp.get("/api/resolve-channel")
def resolve_channel_route():
    api_key = current_app.config.get("YOUTUBE_API_KEY", "")
    if not api_key:
        return jsonify({"error": "YOUTUBE_API_KEY is not set"}), 500

    handle = request.args.get("handle", "").strip() or current_app.config["DEFAULT_CHANNEL_HANDLE"]
    try:
        channel = resolve_channel(handle, api_key, timeout=current_app.config["YOUTUBE_TIMEOUT_SECONDS"])
    except ChannelAuditError as exc:
        logger.warning("Channel resolution failed for %s: %s", handle, exc)
        return _error(exc)

    return jsonify(channel)


@api_bp.get("/api/youtube-audit")
def youtube_audit():
    api_key = current_app.config.get("YOUTUBE_API_KEY", "")
    if not api_key:
        return jsonify({"error": "YOUTUBE_API_KEY is not set"}), 500

    channel_id = request.args.get("channelId", "").strip()
    if not channel_id:
        return jsonify({"error": "channelId is required"}), 400

    max_results = clamp_max_results(
        request.args.get("maxResults"),
        default=current_app.config["DEFAULT_MAX_RESULTS"],
        cap=current_app.config["MAX_RESULTS_CAP"],
    )

    try:
        report = run_channel_audit(
            channel_id,
            api_key,
            max_results,
            timeout=current_app.config["YOUTUBE_TIMEOUT_SECONDS"],
            logger=logger.info,
        )
    except ChannelAuditError as exc:
        logger.warning("Audit failed for %s: %s", channel_id, exc)
        return _error(exc)

    return jsonify(report)
