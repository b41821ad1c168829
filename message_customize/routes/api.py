from flask import Blueprint, jsonify, request
from flask_login import current_user

from message_customize.catalog import get_catalog
from message_customize.models.custom_message_setting import CustomMessageSetting

api_bp = Blueprint("api", __name__)


@api_bp.before_request
def require_admin():
    if not current_user.is_authenticated:
        return jsonify({"error": "Authentication required"}), 401
    if not current_user.is_admin:
        return jsonify({"error": "Administrator required"}), 403


def requested_language():
    """Language from ?lang=, or the user's own. None when not recognized."""
    return get_catalog().find_language(request.args.get("lang") or current_user.language)


@api_bp.route("/languages")
def languages():
    setting = CustomMessageSetting.find_or_default(language=current_user.language)
    return jsonify({
        "languages": get_catalog().available_languages(),
        "using": setting.using_languages(current_user.language),
    })


@api_bp.route("/custom-messages")
def custom_messages():
    lang = requested_language()
    if lang is None:
        return jsonify({"error": "Language not available"}), 404

    setting = CustomMessageSetting.find_or_default(language=current_user.language)
    return jsonify({
        "lang": lang,
        "enabled": setting.enabled(),
        "custom_messages": setting.custom_messages_to_flatten_hash(lang),
    })


@api_bp.route("/available-messages")
def available_messages():
    lang = requested_language()
    if lang is None:
        return jsonify({"error": "Language not available"}), 404

    setting = CustomMessageSetting.find_or_default(language=current_user.language)
    return jsonify({
        "lang": lang,
        "messages": setting.available_messages(lang),
    })
