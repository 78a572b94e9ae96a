from flask import jsonify, request

from models.attendance import Mark
from models.errors import AttendanceError, StoreError, ValidationError
from models.utils import attendance_date

REQUIRED_MARK_FIELDS = ('classSheet', 'attendance', 'user', 'date')


def register_attendance_routes(app, roster_reader, writer):
    """Register all attendance-related routes"""

    @app.route('/attendance/<class_sheet>')
    def class_roster(class_sheet):
        if not class_sheet.strip():
            return jsonify({'error': 'ClassSheet is required'}), 400

        try:
            roster = roster_reader.get_roster(class_sheet)
        except StoreError as e:
            app.logger.error("Error fetching class data: %s", e.message)
            return jsonify({'error': 'Internal Server Error'}), 500

        return jsonify({'success': True, 'data': [student.to_list() for student in roster]})

    @app.route('/attendance/mark', methods=['POST'])
    def mark_attendance():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}

        if any(not data.get(key) for key in REQUIRED_MARK_FIELDS):
            return jsonify({
                'error': 'Missing required fields: classSheet, attendance, user, or date',
            }), 400
        if not isinstance(data['attendance'], list):
            return jsonify({'error': 'attendance must be a list of {rollNumber, status}'}), 400

        try:
            marks = [Mark.from_payload(item) for item in data['attendance']]
        except ValidationError as e:
            return jsonify({'error': e.message}), 400

        # The server's calendar decides the attendance date, not the client
        date = attendance_date(offset_minutes=app.config['ATTENDANCE_UTC_OFFSET_MINUTES'])
        if str(data['date']) != date:
            app.logger.debug("Client date %s ignored; recording attendance for %s", data['date'], date)

        class_sheet = str(data['classSheet'])
        user = str(data['user'])
        try:
            result = writer.mark_attendance(class_sheet, marks, user, date=date)
        except AttendanceError as e:
            app.logger.error("Error marking attendance: %s", e.message)
            return jsonify({'error': 'Failed to mark attendance'}), 500

        app.logger.info("%s marked %d students in '%s' for %s",
                        user, result.rows_updated, class_sheet, result.date)
        return jsonify({
            'success': True,
            'message': 'Attendance marked successfully!',
            'date': result.date,
            'rowsUpdated': result.rows_updated,
        })
