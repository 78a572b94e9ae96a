from flask import jsonify

from models.metrics import get_metrics


def register_status_routes(app):
    """Register liveness and metrics routes"""

    @app.route('/healthz')
    def healthz():
        return 'ok', 200

    @app.route('/metrics')
    def metrics():
        return jsonify(get_metrics())
