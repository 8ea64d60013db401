# 1. 显式导入所有模型类（供__all__和直接引用使用）
from .guest_models import Guest
from .rsvp_models import Rsvp, AttendanceEnum, ChannelEnum

# 2. 定义__all__（控制from models import *的行为）
__all__ = [
    'Guest',
    'Rsvp',
    'AttendanceEnum',
    'ChannelEnum',
]


# 3. 显式注册函数（确保Flask-Migrate能发现模型）
def register_models():
    """强制导入所有模型模块（触发SQLAlchemy注册）"""
    from . import guest_models
    from . import rsvp_models
