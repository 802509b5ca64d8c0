"""
Snapshot Diff Flask Routes
==========================
API endpoints for the JD snapshot version compare view.
"""

import hmac
import time
from functools import wraps

from flask import Blueprint, current_app, request, jsonify, session, g
from werkzeug.exceptions import BadRequest, RequestEntityTooLarge

from config_logging import get_logger, SnapshotDiffError, ValidationError

from .differ import compute_line_diff, CHAR_LIMIT, MAX_LINES
from .models import JdSnapshot
from .snapshots import compare_snapshots

logger = get_logger('snapshot_diff')

snapshot_diff_blueprint = Blueprint('snapshot_diff', __name__)


def _error_response(code: str, message: str, status: int):
    return jsonify({
        'success': False,
        'error': {
            'code': code,
            'message': message,
            'correlation_id': getattr(g, 'correlation_id', 'unknown')
        }
    }), status


def _snapshot_error_response(error: SnapshotDiffError):
    payload = error.to_dict()
    payload['error']['correlation_id'] = getattr(g, 'correlation_id', 'unknown')
    return jsonify(payload), error.status_code


# =============================================================================
# STANDARDIZED ERROR HANDLING DECORATOR
# =============================================================================

def handle_api_errors(f):
    """
    Decorator for standardized API error handling in snapshot diff routes.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        start_time = time.time()
        try:
            result = f(*args, **kwargs)

            elapsed = time.time() - start_time
            if elapsed > 2.0:
                logger.warning(f"Slow snapshot diff call: {f.__name__} took {elapsed:.1f}s")

            return result

        except ValidationError as e:
            logger.warning(f"Validation error in {f.__name__}: {e}")
            return _snapshot_error_response(e)
        except SnapshotDiffError as e:
            logger.error(f"Snapshot diff error in {f.__name__}: {e}")
            return _snapshot_error_response(e)
        except RequestEntityTooLarge as e:
            logger.warning(f"Request body too large in {f.__name__}: {e}")
            return _error_response('PAYLOAD_TOO_LARGE', 'Request body exceeds the upload limit', 413)
        except BadRequest as e:
            logger.warning(f"Invalid JSON in {f.__name__}: {e}")
            return _error_response('INVALID_JSON', 'Request body must be valid JSON', 400)
        except Exception as e:
            logger.exception(f"Unexpected error in {f.__name__}: {e}")
            return _error_response('INTERNAL_ERROR', 'An unexpected error occurred', 500)

    return decorated


# =============================================================================
# CSRF ENFORCEMENT FOR WRITE OPERATIONS
# =============================================================================

@snapshot_diff_blueprint.before_request
def enforce_csrf_on_writes():
    """
    Enforce CSRF protection on all non-GET requests.
    """
    if request.method in ('GET', 'HEAD', 'OPTIONS'):
        return None

    if not current_app.config.get('CSRF_ENABLED', True):
        return None

    token = request.headers.get('X-CSRF-Token') or request.form.get('csrf_token')
    expected = session.get('csrf_token')

    if not token or not expected:
        logger.warning("CSRF validation failed on snapshot_diff",
                       path=request.path, method=request.method)
        return _error_response('CSRF_ERROR', 'Invalid or missing CSRF token', 403)

    if not hmac.compare_digest(str(token), str(expected)):
        logger.warning("CSRF token mismatch on snapshot_diff")
        return _error_response('CSRF_ERROR', 'Invalid CSRF token', 403)

    return None


# =============================================================================
# REQUEST PARSING
# =============================================================================

def _get_json_body() -> dict:
    data = request.get_json(force=True, silent=False)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _require_text(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        raise ValidationError(f"{key} is required", field=key)
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string", field=key)
    return value


def _optional_version(data: dict, key: str):
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{key} must be an integer", field=key)
    return value


def _parse_snapshots(raw) -> list:
    if not isinstance(raw, list):
        raise ValidationError("snapshots must be a list", field='snapshots')

    snapshots = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ValidationError(f"snapshots[{index}] must be an object", field='snapshots')
        version = item.get('version')
        if isinstance(version, bool) or not isinstance(version, int):
            raise ValidationError(
                f"snapshots[{index}].version must be an integer", field='snapshots'
            )
        if not isinstance(item.get('snapshot_text'), str):
            raise ValidationError(
                f"snapshots[{index}].snapshot_text must be a string", field='snapshots'
            )
        snapshots.append(JdSnapshot.from_dict(item))

    versions = [s.version for s in snapshots]
    if len(set(versions)) != len(versions):
        raise ValidationError("Snapshot versions must be unique", field='snapshots')

    return snapshots


# =============================================================================
# API ENDPOINTS
# =============================================================================

@snapshot_diff_blueprint.route('/diff', methods=['POST'])
@handle_api_errors
def diff_texts():
    """
    Diff two raw texts.

    Request body:
        { old_text: str, new_text: str }

    Returns:
        {
            success: true,
            diff: {
                left_column: [{type, text}], right_column: [{type, text}],
                added_count, removed_count, truncated, summary
            }
        }
    """
    data = _get_json_body()
    old_text = _require_text(data, 'old_text')
    new_text = _require_text(data, 'new_text')

    diff_result = compute_line_diff(old_text, new_text)

    return jsonify({
        'success': True,
        'diff': diff_result.to_dict()
    })


@snapshot_diff_blueprint.route('/compare', methods=['POST'])
@handle_api_errors
def compare_versions():
    """
    Compare two versions from a job card's JD snapshot history.

    Request body:
        {
            snapshots: [{ version, captured_at, snapshot_text }],
            old_version?: int,
            new_version?: int
        }

    Returns:
        {
            success: true,
            comparison: { old: {version, captured_at}, new: {...}, diff: {...} }
        }
    """
    data = _get_json_body()
    snapshots = _parse_snapshots(data.get('snapshots'))
    old_version = _optional_version(data, 'old_version')
    new_version = _optional_version(data, 'new_version')

    comparison = compare_snapshots(snapshots, old_version, new_version)

    return jsonify({
        'success': True,
        'comparison': comparison.to_dict()
    })


@snapshot_diff_blueprint.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return jsonify({
        'success': True,
        'module': 'snapshot_diff',
        'status': 'healthy',
        'limits': {
            'char_limit': CHAR_LIMIT,
            'max_lines': MAX_LINES
        }
    })
