"""
JD Snapshot Diff - Flask Application
Serves the version compare API for job description snapshots
"""
import secrets

from flask import Flask, jsonify, session, g

from config_logging import get_config, get_logger, StructuredLogger, APP_NAME
from snapshot_diff import snapshot_diff_blueprint, __version__

logger = get_logger('app')


def create_app(config=None):
    """Build the Flask app and register the snapshot diff blueprint"""
    config = config or get_config()

    app = Flask(__name__)
    app.config['SECRET_KEY'] = config.secret_key
    app.config['CSRF_ENABLED'] = config.csrf_enabled
    app.config['MAX_CONTENT_LENGTH'] = config.max_content_length

    app.register_blueprint(snapshot_diff_blueprint, url_prefix='/api/snapshot-diff')

    @app.before_request
    def assign_correlation_id():
        """Tag every request's log lines with one correlation ID"""
        g.correlation_id = StructuredLogger.new_correlation_id()

    @app.after_request
    def add_security_headers(response):
        """Add security headers to every response"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['X-XSS-Protection'] = '1; mode=block'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

    @app.route('/api/health', methods=['GET'])
    def health():
        """Application health check"""
        return jsonify({'status': 'healthy', 'service': APP_NAME, 'version': __version__})

    @app.route('/api/csrf-token', methods=['GET'])
    def csrf_token():
        """Issue a CSRF token bound to the session"""
        token = session.get('csrf_token')
        if not token:
            token = secrets.token_urlsafe(32)
            session['csrf_token'] = token
        return jsonify({'csrf_token': token})

    return app


app = create_app()


if __name__ == '__main__':
    config = get_config()
    is_valid, errors = config.validate()
    for error in errors:
        logger.warning(f"Config: {error}")
    logger.info(f"Starting {APP_NAME} on {config.host}:{config.port}")
    app.run(host=config.host, port=config.port, debug=config.debug)
