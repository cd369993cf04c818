from .user import user
from .event import event
from .registration import registration

__all__ = ["user", "event", "registration"]
