# utils/template_renderer.py
import re

NAME_PLACEHOLDER = '[nama]'
LINK_PLACEHOLDER = '[link-undangan]'

DEFAULT_GUEST_NAME = 'Invited Guest'
LINK_FALLBACK = 'Invitation link will follow.'

_NAME_TOKEN = re.compile(re.escape(NAME_PLACEHOLDER), re.IGNORECASE)
_LINK_TOKEN = re.compile(re.escape(LINK_PLACEHOLDER), re.IGNORECASE)

FORMAL_TEMPLATE = '\n'.join([
    'Dear [nama],',
    '',
    'With great pleasure, we invite you to attend our wedding celebration.',
    '',
    'Please open the digital invitation below for the event details and to confirm your attendance:',
    '[link-undangan]',
    '',
    'Thank you for your presence and your blessings.',
])

MUSLIM_TEMPLATE = '\n'.join([
    'Assalamualaikum Warahmatullahi Wabarakatuh,',
    '',
    'By the grace and blessing of Allah SWT, we would be honoured to have [nama] join us and offer prayers at our wedding.',
    '',
    'Event details and attendance confirmation are available at the following link:',
    '[link-undangan]',
    '',
    'For your attention and presence, we say Jazakumullahu Khairan.',
    'Wassalamualaikum Warahmatullahi Wabarakatuh.',
])

INVITATION_TEMPLATES = (
    {
        'key': 'formal',
        'label': 'Formal Template',
        'description': 'A formal and professional greeting.',
        'content': FORMAL_TEMPLATE,
    },
    {
        'key': 'muslim',
        'label': 'Muslim Template',
        'description': 'An Islamic greeting with prayers.',
        'content': MUSLIM_TEMPLATE,
    },
)

CUSTOM_TEMPLATE_KEY = 'custom'


def get_template(key):
    return next((t for t in INVITATION_TEMPLATES if t['key'] == key), None)


def detect_template_key(content):
    """Key of the built-in template whose content matches exactly, else 'custom'."""
    matched = next((t for t in INVITATION_TEMPLATES if t['content'] == content), None)
    return matched['key'] if matched else CUSTOM_TEMPLATE_KEY


def render_invitation(template, name, link):
    """
    Fill ``[nama]`` and ``[link-undangan]`` in ``template``.

    A template without a name token gets a "Dear, <name>," greeting on top and
    one without a link token gets the link appended, so every message carries
    both the recipient and the invitation link (or the fallback phrase).
    """
    template = template or ''
    safe_name = (name or '').strip() or DEFAULT_GUEST_NAME
    safe_link = (link or '').strip()

    has_name = _NAME_TOKEN.search(template) is not None
    has_link = _LINK_TOKEN.search(template) is not None

    # callables keep backslashes in names/links literal
    result = _NAME_TOKEN.sub(lambda _: safe_name, template)
    result = _LINK_TOKEN.sub(lambda _: safe_link or LINK_FALLBACK, result)

    if not has_name:
        result = '\n'.join([f"Dear, {safe_name},", '', result])

    if not has_link:
        link_line = f"Invitation link: {safe_link}" if safe_link else LINK_FALLBACK
        result = f"{result}\n\n{link_line}"

    return result.strip()


def build_share_message(base_url, couple_names, event_date, event_location):
    """General invitation text for sharing without a personalized name."""
    if not base_url:
        return ''
    return '\n'.join([
        'Assalamualaikum Warahmatullahi Wabarakatuh.',
        'With gratitude, we invite you to attend our wedding celebration.',
        couple_names,
        event_date,
        event_location,
        '',
        'Please open the full digital invitation and confirm your attendance at the following link:',
        f"{base_url.rstrip('/')}/",
    ])
