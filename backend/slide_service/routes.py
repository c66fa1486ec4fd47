"""
Slide service routes: turn a photographed or hand-drawn slide into a clean outline.
Validates the image payload, asks the completion API, and normalizes the reply.
"""

import logging
from typing import Any, Dict, Tuple, Union

from flask import Blueprint, Response, current_app, jsonify, request, url_for
from werkzeug.exceptions import MethodNotAllowed

from backend.slide_service.completion import CompletionServiceError, request_slide_completion
from backend.slide_service.config import SlideConfig
from backend.slide_service.normalize import normalize_slide, parse_json_object

logger = logging.getLogger(__name__)

# --- BLUEPRINT SETUP ---
slide_bp = Blueprint("slide", __name__)

# --- CORS SETTINGS ---
ALLOW_ORIGIN = "*"
ALLOW_METHODS = "POST, OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization"

IMAGE_PREFIX = "data:image"

HANDLED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@slide_bp.after_request
def add_cors_origin(response: Response) -> Response:
    """
    Attach the wildcard origin to every slide response, errors included.
    """
    response.headers["Access-Control-Allow-Origin"] = ALLOW_ORIGIN
    return response


@slide_bp.app_errorhandler(MethodNotAllowed)
def method_not_allowed(e: MethodNotAllowed) -> Union[MethodNotAllowed, Tuple[Response, int]]:
    """
    Answer methods the router rejects (TRACE, CONNECT, ...) on the slide URL.

    These never reach the view, so the blueprint's after_request does not run.
    Other URLs keep the default 405.
    """
    if request.path != url_for("slide.extract_slide"):
        return e

    response = jsonify({"error": "Use POST"})
    response.headers["Access-Control-Allow-Origin"] = ALLOW_ORIGIN
    return response, 405


def read_json_body() -> Dict[str, Any]:
    """
    Read the request body as a JSON object.

    Handles JSON bodies, raw text bodies, and JSON bodies that are themselves
    a JSON-encoded string. Anything undecodable becomes {}.
    """
    return parse_json_object(request.get_data(as_text=True))


def get_slide_config() -> SlideConfig:
    config = current_app.config.get("SLIDE_CONFIG")
    if config is None:
        config = SlideConfig.from_env()
    return config


# --- ROUTES ---

@slide_bp.route("/slide", methods=HANDLED_METHODS)
def extract_slide() -> Union[Response, Tuple[Response, int]]:
    """
    Convert a sketch image into a slide outline.

    Expects:
    - imageDataUrl (str): data:image/*;base64,... string

    Returns:
        200: {title, bullets, notes}. Empty body for OPTIONS preflight.
        400: imageDataUrl missing or malformed.
        405: Method other than POST/OPTIONS.
        500: Missing OPENAI_API_KEY or unexpected server error.
        Upstream status: The completion API rejected the request.
    """
    if request.method == "OPTIONS":
        response = Response(status=200)
        response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
        response.headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
        return response

    if request.method != "POST":
        return jsonify({"error": "Use POST"}), 405

    data = read_json_body()
    image_data_url = data.get("imageDataUrl")
    if not isinstance(image_data_url, str) or not image_data_url.startswith(IMAGE_PREFIX):
        return jsonify({"error": "imageDataUrl must be a data:image/*;base64,... string"}), 400

    config = get_slide_config()
    if not config.api_key:
        return jsonify({"error": "Missing OPENAI_API_KEY"}), 500

    try:
        content = request_slide_completion(config, image_data_url)
        slide = normalize_slide(parse_json_object(content))
        return jsonify(slide.to_dict()), 200

    except CompletionServiceError as e:
        return jsonify({"error": f"OpenAI error: {e.detail}"}), e.status_code

    except Exception:
        logger.exception("Slide extraction failed")
        return jsonify({"error": "Unexpected server error"}), 500
