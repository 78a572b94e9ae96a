import os

from flask import Flask, jsonify
from flask_cors import CORS

from config import Config
from models.attendance import AttendanceWriter
from models.auth import AuthGate
from models.columns import DateColumnResolver
from models.logger import init_logging
from models.notifications import EmailNotifier, NotificationDispatcher
from models.roster import RosterReader
from models.sheets import SheetsStore
from routes.attendance import register_attendance_routes
from routes.auth import register_auth_routes
from routes.status import register_status_routes


def create_app(config_object=Config, store=None, notifier=None):
    """
    Build the Flask app. The store handle is created once here and shared
    by every component for the life of the process; tests pass their own.
    """
    app = Flask(__name__)
    app.config.from_object(config_object)

    init_logging(app)
    CORS(app, origins=app.config.get('CORS_ORIGINS', ['*']))

    if store is None:
        store = SheetsStore.from_config(app.config)
    if notifier is None:
        notifier = EmailNotifier.from_config(app.config)

    auth_gate = AuthGate(store, sheet_name=app.config['USER_SHEET'])
    roster_reader = RosterReader(store)
    writer = AttendanceWriter(
        store,
        DateColumnResolver(store),
        roster_reader,
        NotificationDispatcher(notifier),
        audit_sheet=app.config['ACTIVITY_SHEET'],
    )

    # Register route modules
    register_auth_routes(app, auth_gate)
    register_attendance_routes(app, roster_reader, writer)
    register_status_routes(app)

    @app.errorhandler(404)
    def _handle_404(error):
        return jsonify({'error': 'Not Found'}), 404

    @app.errorhandler(500)
    def _handle_500(error):
        app.logger.error("500: %s", error)
        return jsonify({'error': 'Internal Server Error'}), 500

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host=os.getenv('HOST', '0.0.0.0'), port=app.config['PORT'], debug=app.config['DEBUG'])
