import uuid
from sqlalchemy.orm import validates
from extensions import db
from .timestamps import utcnow, to_iso


def guest_name_key(name):
    # 数据库 lower() 不一定支持 Unicode，统一在 Python 侧折叠大小写
    return name.casefold()


class Guest(db.Model):
    # 服务端保存的宾客及其邀请链接
    __tablename__ = 'guests'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(255), nullable=False, index=True)
    name_key = db.Column(db.String(255), nullable=False, index=True)
    invite_link = db.Column(db.String(1024), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    @validates('name')
    def _sync_name_key(self, key, value):
        self.name_key = guest_name_key(value)
        return value

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'inviteLink': self.invite_link,
            'createdAt': to_iso(self.created_at),
            'updatedAt': to_iso(self.updated_at),
        }

    def __repr__(self):
        return f"<Guest {self.name}>"
