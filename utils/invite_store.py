# utils/invite_store.py
"""JSON-file key/value store for the invite tool state."""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from .guest_list import GuestInvite
from .template_renderer import FORMAL_TEMPLATE

logger = logging.getLogger(__name__)

STORAGE_KEY = 'dashboard-invite-tool-state'


class StoredGuest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: StrictStr
    name: StrictStr
    slug: StrictStr
    created_at: Any = Field(default=None, alias='createdAt', validate_default=True)

    @field_validator('created_at', mode='before')
    @classmethod
    def _numeric_or_now(cls, value: Any) -> int:
        # anything but a real number is replaced by the current time
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return int(time.time() * 1000)
        return value


class StoredState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    raw_guest_names: Any = Field(default=None, alias='rawGuestNames')
    intro_text: Any = Field(default=None, alias='introText')
    guests: Any = None


@dataclass
class InviteToolState:
    raw_guest_names: str = ''
    intro_text: str = FORMAL_TEMPLATE
    guests: list[GuestInvite] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'rawGuestNames': self.raw_guest_names,
            'introText': self.intro_text,
            'guests': [g.to_dict() for g in self.guests],
        }


@dataclass
class ParseSuccess:
    value: InviteToolState
    ok: bool = True


@dataclass
class ParseFailure:
    reason: str
    ok: bool = False


ParseResult = Union[ParseSuccess, ParseFailure]


def parse_stored_state(raw: Any) -> ParseResult:
    """
    Validate a stored blob before any field is trusted.

    ``raw`` may be the JSON text or an already decoded object. Fields of the
    wrong type keep their defaults and malformed guest entries are dropped;
    only an undecodable or non-object blob is a failure.
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            return ParseFailure(reason=f"invalid JSON: {e}")

    try:
        stored = StoredState.model_validate(raw)
    except ValidationError as e:
        return ParseFailure(reason=f"unexpected shape: {e.error_count()} error(s)")

    state = InviteToolState()
    if isinstance(stored.raw_guest_names, str):
        state.raw_guest_names = stored.raw_guest_names
    if isinstance(stored.intro_text, str):
        state.intro_text = stored.intro_text

    if isinstance(stored.guests, list):
        for item in stored.guests:
            try:
                guest = StoredGuest.model_validate(item)
            except ValidationError:
                continue
            state.guests.append(GuestInvite(
                id=guest.id,
                name=guest.name,
                slug=guest.slug,
                created_at=guest.created_at,
            ))

    return ParseSuccess(value=state)


class InviteToolStore:
    """
    Persist the invite tool state under a fixed key in a JSON file.

    The file maps storage keys to serialized blobs, like browser local
    storage. Every save rewrites the whole blob; concurrent writers are
    last-write-wins.
    """

    def __init__(self, path: str, key: str = STORAGE_KEY) -> None:
        self.path = path
        self.key = key

    # ------------------------------------------------------------------
    # Persistence helpers
    # ------------------------------------------------------------------
    def _read_all(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, encoding='utf-8') as f:
            try:
                data = json.load(f)
            except ValueError as e:
                logger.warning("Invite tool store %s is not valid JSON: %s", self.path, e)
                return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> InviteToolState:
        """Current state; missing or malformed data yields the defaults."""
        blob = self._read_all().get(self.key)
        if blob is None:
            return InviteToolState()

        result = parse_stored_state(blob)
        if not result.ok:
            logger.warning("Failed to restore invite tool data: %s", result.reason)
            return InviteToolState()
        return result.value

    def save(self, state: InviteToolState) -> None:
        """Persist ``state`` atomically, keeping other keys in the file."""
        data = self._read_all()
        data[self.key] = json.dumps(state.to_dict(), ensure_ascii=False)
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        tmp = self.path + '.tmp'
        try:
            with open(tmp, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise

