import uuid
from enum import Enum
from extensions import db
from .timestamps import utcnow, to_iso


class AttendanceEnum(Enum):
    attending = "attending"          # 出席
    not_attending = "not_attending"  # 不出席


class ChannelEnum(Enum):
    website = "website"    # 网站表单
    whatsapp = "whatsapp"  # 消息应用
    manual = "manual"      # 管理员手动录入


class Rsvp(db.Model):
    __tablename__ = 'rsvps'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False, default='')
    attendance = db.Column(db.Enum(AttendanceEnum), nullable=False, index=True)
    guest_count = db.Column(db.Integer, nullable=False, default=0)
    channel = db.Column(db.Enum(ChannelEnum), nullable=False, default=ChannelEnum.website)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'message': self.message,
            'attendance': self.attendance.value,
            'guestCount': self.guest_count,
            'channel': self.channel.value,
            'createdAt': to_iso(self.created_at),
            'updatedAt': to_iso(self.updated_at),
        }

    def __repr__(self):
        return f"<Rsvp {self.name} - {self.attendance}>"
