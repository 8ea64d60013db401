from flask import Blueprint, request, jsonify, current_app
from utils.guest_list import (
    GuestListError, build_guest_list, build_whatsapp_url, format_slug_as_name, parse_guest_names,
    personalize,
)
from utils.responses import error_response, get_json_object
from utils.template_renderer import (
    INVITATION_TEMPLATES, build_share_message, detect_template_key, get_template,
)

invite_tool_bp = Blueprint('invite_tool', __name__, url_prefix='/api/invite-tool')

STORE_EXTENSION_KEY = 'invite_tool_store'


def get_store():
    return current_app.extensions[STORE_EXTENSION_KEY]


def share_base_url():
    """Configured public URL of the invitation, else the URL this request came in on."""
    return (current_app.config.get('SHARE_BASE_URL') or request.host_url).rstrip('/')


def state_view(state, message=None):
    base_url = share_base_url()
    view = {
        'rawGuestNames': state.raw_guest_names,
        'introText': state.intro_text,
        'templateKey': detect_template_key(state.intro_text),
        'shareBaseUrl': base_url,
        'guests': [g.to_dict() for g in personalize(state.guests, base_url, state.intro_text)],
    }
    if message:
        view['message'] = message
    return view


@invite_tool_bp.route('', methods=['GET'])
def get_invite_tool():
    try:
        state = get_store().load()
    except OSError as e:
        current_app.logger.error(f"Failed to read invite tool state: {e}")
        return error_response('Failed to load the invite tool data.', 500, e)
    return jsonify({'data': state_view(state)})


@invite_tool_bp.route('', methods=['PUT'])
def update_invite_tool():
    body = get_json_object()
    if body is None:
        return error_response('Invalid payload.', 400)

    raw_names = body.get('rawGuestNames')
    intro_text = body.get('introText')
    template_key = body.get('templateKey')

    errors = []
    if raw_names is not None and not isinstance(raw_names, str):
        errors.append('Guest names must be text.')
    if intro_text is not None and not isinstance(intro_text, str):
        errors.append('Intro text must be text.')
    template = None
    if template_key is not None:
        template = get_template(template_key)
        if template is None:
            errors.append('Unknown invitation template.')
    if errors:
        return error_response(' '.join(errors), 422)

    store = get_store()
    try:
        state = store.load()
        if raw_names is not None:
            state.raw_guest_names = raw_names
        # 模板优先于自定义文本
        if template is not None:
            state.intro_text = template['content']
        elif intro_text is not None:
            state.intro_text = intro_text
        store.save(state)
    except OSError as e:
        current_app.logger.error(f"Failed to save invite tool state: {e}")
        return error_response('Failed to save the invite tool data.', 500, e)

    message = f"{template['label']} applied." if template else None
    return jsonify({'data': state_view(state, message)})


@invite_tool_bp.route('/generate', methods=['POST'])
def generate_guest_list():
    body = get_json_object() or {}
    store = get_store()
    try:
        state = store.load()
    except OSError as e:
        current_app.logger.error(f"Failed to read invite tool state: {e}")
        return error_response('Failed to load the invite tool data.', 500, e)

    raw_names = body.get('rawGuestNames')
    if not isinstance(raw_names, str):
        raw_names = state.raw_guest_names

    try:
        guests = build_guest_list(raw_names)
    except GuestListError as e:
        return error_response(str(e), 422)

    # 整批替换，不做增量追加
    state.guests = guests
    state.raw_guest_names = '\n'.join(parse_guest_names(raw_names))
    try:
        store.save(state)
    except OSError as e:
        current_app.logger.error(f"Failed to save invite tool state: {e}")
        return error_response('Failed to save the invite tool data.', 500, e)

    current_app.logger.info(f"Generated invite batch with {len(guests)} guests")
    return jsonify({'data': state_view(state, 'Guest list created.')})


@invite_tool_bp.route('/guests/<guest_id>', methods=['DELETE'])
def remove_guest(guest_id):
    store = get_store()
    try:
        state = store.load()
        guest = next((g for g in state.guests if g.id == guest_id), None)
        if guest is None:
            return error_response('Guest not found in the invite list.', 404)
        state.guests = [g for g in state.guests if g.id != guest_id]
        store.save(state)
    except OSError as e:
        current_app.logger.error(f"Failed to save invite tool state: {e}")
        return error_response('Failed to save the invite tool data.', 500, e)

    return jsonify({'data': state_view(state, f"{guest.name} removed from the guest list.")})


@invite_tool_bp.route('/lookup', methods=['GET'])
def lookup_guest():
    """Resolve the ``?to=<slug>`` of an invite link to the guest's name."""
    slug = request.args.get('to', '').strip()
    if not slug:
        return error_response('Missing guest slug.', 400)

    try:
        state = get_store().load()
    except OSError as e:
        current_app.logger.error(f"Failed to read invite tool state: {e}")
        return error_response('Failed to load the invite tool data.', 500, e)

    guest = next((g for g in state.guests if g.slug == slug), None)
    if guest is None:
        # links from an older batch still get a greeting
        return jsonify({'data': {'name': format_slug_as_name(slug), 'slug': slug, 'source': 'slug'}})
    return jsonify({'data': {'name': guest.name, 'slug': guest.slug, 'source': 'guest_list'}})


@invite_tool_bp.route('/templates', methods=['GET'])
def get_templates():
    return jsonify({'data': list(INVITATION_TEMPLATES)})


@invite_tool_bp.route('/share', methods=['GET'])
def get_share_message():
    config = current_app.config
    message = build_share_message(
        share_base_url(),
        config['COUPLE_NAMES'],
        config['EVENT_DATE'],
        config['EVENT_LOCATION'],
    )
    return jsonify({'data': {
        'message': message,
        'whatsappUrl': build_whatsapp_url(message) if message else '',
    }})
