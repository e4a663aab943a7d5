# minage/models/password_history.py
"""Password history: previous password versions of a user"""
from minage.extensions import db
from minage.utils.clock import utcnow


class PasswordHistory(db.Model):
    """A password the user had before the current one"""
    __tablename__ = 'password_history'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)

    password_hash = db.Column(db.String(256), nullable=False)

    # When this password was set, and when it was replaced
    used_from = db.Column(db.DateTime, nullable=False)
    used_until = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f'<PasswordHistory user_id={self.user_id} used_from={self.used_from}>'
