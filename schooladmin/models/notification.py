"""
Notification Model
"""
from schooladmin.utils.helpers import parse_timestamp, to_iso


class Notification:
    """Notification shown in the dashboard panel"""

    def __init__(self, id, title='', description=None, type='INFO',
                 is_read=False, user_id=None, created_at=None):
        self.id = id
        self.user_id = user_id
        self.type = type
        self.title = title
        self.description = description
        self.is_read = is_read
        self.created_at = created_at

    def __repr__(self):
        state = 'read' if self.is_read else 'unread'
        return f'<Notification {self.id} ({state})>'

    def __eq__(self, other):
        if not isinstance(other, Notification):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data['id'],
            user_id=data.get('user_id'),
            type=data.get('type') or 'INFO',
            title=data.get('title') or '',
            description=data.get('description'),
            is_read=bool(data.get('is_read')),
            created_at=parse_timestamp(data.get('created_at')),
        )

    def copy(self):
        return Notification(
            id=self.id,
            user_id=self.user_id,
            type=self.type,
            title=self.title,
            description=self.description,
            is_read=self.is_read,
            created_at=self.created_at,
        )

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'type': self.type,
            'title': self.title,
            'description': self.description,
            'is_read': self.is_read,
            'created_at': to_iso(self.created_at),
        }
