from flask import jsonify, request

from models.errors import AuthError, StoreError, ValidationError


def register_auth_routes(app, auth_gate):
    """Register the login route"""

    @app.route('/login', methods=['POST'])
    def login():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        username = str(data.get('username') or '')
        password = str(data.get('password') or '')

        try:
            class_sheets = auth_gate.login(username, password)
        except ValidationError:
            return jsonify({'error': 'Username and password are required'}), 400
        except AuthError as e:
            return jsonify({'error': e.message}), 401
        except StoreError as e:
            app.logger.error("Error during login: %s", e.message)
            return jsonify({'error': 'Internal Server Error'}), 500

        return jsonify({
            'success': True,
            'user': {'username': username, 'classSheets': class_sheets},
        })
