# minage/models/user.py
"""User model with current password and pending required actions"""
from minage.extensions import db
from minage.policy import CredentialRecord
from minage.utils.clock import utcnow


class User(db.Model):
    """User account within a realm"""
    __tablename__ = 'users'
    __table_args__ = (db.UniqueConstraint('realm_id', 'username'),)

    id = db.Column(db.Integer, primary_key=True)
    realm_id = db.Column(db.Integer, db.ForeignKey('realms.id'), nullable=False)
    username = db.Column(db.String(80), nullable=False)

    # NULL until a first password is set
    password_hash = db.Column(db.String(256), nullable=True)
    password_created = db.Column(db.DateTime, nullable=True)

    # Comma separated required action ids, e.g. "UPDATE_PASSWORD"
    required_actions = db.Column(db.String(256), nullable=False, default='')

    is_admin = db.Column(db.Boolean, nullable=False, default=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    password_history = db.relationship('PasswordHistory', backref='user',
                                       lazy=True, cascade='all, delete-orphan')

    def __repr__(self):
        return f'<User {self.username}>'

    def get_required_actions(self):
        return frozenset(action for action in (self.required_actions or '').split(',') if action)

    def add_required_action(self, action):
        actions = set(self.get_required_actions())
        actions.add(action)
        self.required_actions = ','.join(sorted(actions))

    def remove_required_action(self, action):
        actions = set(self.get_required_actions())
        actions.discard(action)
        self.required_actions = ','.join(sorted(actions))

    def credential_records(self):
        """Stored password versions, current password included"""
        records = []
        if self.password_hash is not None and self.password_created is not None:
            records.append(CredentialRecord(created_at=self.password_created))
        records.extend(CredentialRecord(created_at=entry.used_from) for entry in self.password_history)
        return records
