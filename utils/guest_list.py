# utils/guest_list.py
import re
import time
import uuid
from dataclasses import dataclass
from urllib.parse import quote

from .slug import slugify, ensure_unique_slug
from .template_renderer import render_invitation

WHATSAPP_SHARE_URL = 'https://wa.me/?text='

_SEPARATORS = re.compile(r'[\n,]+')

# characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


class GuestListError(ValueError):
    """Raised when a batch cannot be built from the given input."""


@dataclass
class GuestInvite:
    id: str
    name: str
    slug: str
    created_at: int  # epoch milliseconds

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'createdAt': self.created_at,
        }


@dataclass
class PersonalizedInvite(GuestInvite):
    invite_link: str = ''
    personalized_text: str = ''
    whatsapp_url: str = ''

    def to_dict(self):
        data = super().to_dict()
        data.update({
            'inviteLink': self.invite_link,
            'personalizedText': self.personalized_text,
            'whatsappUrl': self.whatsapp_url,
        })
        return data


def encode_uri_component(value):
    return quote(value, safe=_URI_COMPONENT_SAFE)


def parse_guest_names(raw_text):
    """Split on newlines/commas, trim, drop empties; input order is kept."""
    return [name.strip() for name in _SEPARATORS.split(raw_text or '') if name.strip()]


def build_guest_list(raw_text, now_ms=None, id_factory=None):
    names = parse_guest_names(raw_text)
    if not names:
        raise GuestListError('Enter at least one guest name first.')

    batch_start = int(time.time() * 1000) if now_ms is None else now_ms
    make_id = id_factory or (lambda index: str(uuid.uuid4()))

    used = set()
    guests = []
    for index, name in enumerate(names):
        slug = ensure_unique_slug(slugify(name) or f"guest-{index + 1}", used)
        used.add(slug)
        guests.append(GuestInvite(
            id=make_id(index),
            name=name,
            slug=slug,
            created_at=batch_start + index,
        ))
    return guests


def build_invite_link(base_url, slug):
    if not base_url:
        return ''
    return f"{base_url.rstrip('/')}/?to={encode_uri_component(slug)}"


def format_slug_as_name(slug):
    """``budi-santoso`` -> ``Budi Santoso``, for slugs no stored guest owns."""
    return ' '.join(word[:1].upper() + word[1:].lower() for word in slug.split('-'))


def build_whatsapp_url(text):
    return f"{WHATSAPP_SHARE_URL}{encode_uri_component(text)}"


def personalize(guests, base_url, template):
    """Derive link, message and share URL per guest; nothing here is stored."""
    invites = []
    for guest in guests:
        link = build_invite_link(base_url, guest.slug)
        text = render_invitation(template, guest.name, link)
        invites.append(PersonalizedInvite(
            id=guest.id,
            name=guest.name,
            slug=guest.slug,
            created_at=guest.created_at,
            invite_link=link,
            personalized_text=text,
            whatsapp_url=build_whatsapp_url(text),
        ))
    return invites
