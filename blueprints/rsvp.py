import math
from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from models import Rsvp, AttendanceEnum, ChannelEnum
from extensions import db
from utils.responses import error_response, get_json_object

rsvp_bp = Blueprint('rsvp', __name__, url_prefix='/api/rsvp')

ATTENDANCE_VALUES = {e.value for e in AttendanceEnum}
CHANNEL_VALUES = {e.value for e in ChannelEnum}

# guest_count is a 32-bit INTEGER column
MAX_GUEST_COUNT = 2_147_483_647


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def parse_rsvp_payload(body):
    """Return ``(errors, values)``; ``values`` is None when anything is invalid."""
    errors = []

    name = body.get('name')
    name = name.strip() if isinstance(name, str) else ''
    if len(name) < 3:
        errors.append('Name is required and must be at least 3 characters.')

    message = body.get('message')
    message = message.strip() if isinstance(message, str) else ''

    attendance = body.get('attendance')
    if attendance not in ATTENDANCE_VALUES:
        errors.append('Attendance status is not valid.')

    guest_count = body.get('guestCount')
    if isinstance(guest_count, bool) or not isinstance(guest_count, (int, float)) \
            or not math.isfinite(guest_count):
        guest_count = 0
    guest_count = min(MAX_GUEST_COUNT, max(0, _round_half_up(guest_count)))

    channel = body.get('channel')
    if channel not in CHANNEL_VALUES:
        channel = ChannelEnum.website.value

    if errors:
        return errors, None

    return errors, {
        'name': name,
        'message': message,
        'attendance': AttendanceEnum(attendance),
        'guest_count': guest_count,
        'channel': ChannelEnum(channel),
    }


def list_rsvps(attendance=None):
    """Newest-first RSVP records, optionally filtered by attendance value."""
    query = Rsvp.query
    if attendance in ATTENDANCE_VALUES:
        query = query.filter(Rsvp.attendance == AttendanceEnum(attendance))
    return query.order_by(Rsvp.created_at.desc()).all()


@rsvp_bp.route('', methods=['GET'])
def get_rsvps():
    try:
        items = list_rsvps(request.args.get('attendance'))
        return jsonify({'data': [item.to_dict() for item in items]})
    except SQLAlchemyError as e:
        current_app.logger.error(f"Failed to fetch RSVPs: {e}")
        return error_response('Failed to load RSVP data.', 500, e)


@rsvp_bp.route('', methods=['POST'])
def create_rsvp():
    body = get_json_object()
    if body is None:
        return error_response('Invalid payload.', 400)

    errors, values = parse_rsvp_payload(body)
    if values is None:
        return error_response(' '.join(errors), 422)

    try:
        record = Rsvp(**values)
        db.session.add(record)
        db.session.commit()
        current_app.logger.info(f"RSVP saved for {record.name} ({record.attendance.value})")
        return jsonify({'data': record.to_dict()}), 201
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to create RSVP: {e}")
        return error_response('Failed to save RSVP data.', 500, e)
