from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from models import Guest
from models.guest_models import guest_name_key
from extensions import db
from utils.responses import error_response, get_json_object

guests_bp = Blueprint('guests', __name__, url_prefix='/api/guests')


def parse_guest_payload(body):
    errors = []

    name = body.get('name')
    name = name.strip() if isinstance(name, str) else ''
    if len(name) < 2:
        errors.append('Guest name is required and must be at least 2 characters.')

    invite_link = body.get('inviteLink')
    invite_link = invite_link.strip() if isinstance(invite_link, str) else ''
    if not invite_link:
        errors.append('Invitation link is required.')

    if errors:
        return errors, None
    return errors, {'name': name, 'invite_link': invite_link}


@guests_bp.route('', methods=['GET'])
def get_guests():
    name = request.args.get('name')
    try:
        query = Guest.query
        if name:
            # 按名字精确匹配（不区分大小写），最多一条
            query = query.filter(Guest.name_key == guest_name_key(name))
        query = query.order_by(Guest.created_at.desc())
        if name:
            query = query.limit(1)
        return jsonify({'data': [guest.to_dict() for guest in query.all()]})
    except SQLAlchemyError as e:
        current_app.logger.error(f"Failed to fetch guests: {e}")
        return error_response('Failed to load guest data.', 500, e)


@guests_bp.route('', methods=['POST'])
def create_guest():
    body = get_json_object()
    if body is None:
        return error_response('Invalid payload.', 400)

    errors, values = parse_guest_payload(body)
    if values is None:
        return error_response(' '.join(errors), 422)

    try:
        guest = Guest(**values)
        db.session.add(guest)
        db.session.commit()
        return jsonify({'data': guest.to_dict()}), 201
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to create guest: {e}")
        return error_response('Failed to save guest data.', 500, e)


@guests_bp.route('/<guest_id>', methods=['DELETE'])
def delete_guest(guest_id):
    guest_id = guest_id.strip()
    if not guest_id:
        return error_response('Guest ID not found.', 400)

    try:
        guest = db.session.get(Guest, guest_id)
        if not guest:
            return error_response('Guest not found.', 404)

        guest_name = guest.name
        db.session.delete(guest)
        db.session.commit()
        current_app.logger.info(f"Deleted guest {guest_id} ({guest_name})")
        return jsonify({'success': True})
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Failed to delete guest {guest_id}: {e}")
        return error_response('Failed to delete guest data.', 500, e)
