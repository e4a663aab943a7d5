# minage/models/realm.py
"""Realm and per-realm password policy settings"""
from minage.extensions import db
from minage.utils.clock import utcnow


class Realm(db.Model):
    """A set of users sharing one password policy configuration"""
    __tablename__ = 'realms'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(80), unique=True, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    policy_settings = db.relationship('RealmPolicySetting', backref='realm',
                                      lazy=True, cascade='all, delete-orphan')
    users = db.relationship('User', backref='realm', lazy=True,
                            cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Realm {self.name}>'

    def get_policy_setting(self, policy_id):
        for setting in self.policy_settings:
            if setting.policy_id == policy_id:
                return setting
        return None

    def get_policy_config(self, policy_id):
        """
        Configuration value for a policy as the evaluator receives it.

        Returns the cached parsed value when there is one, otherwise the raw
        stored string, or None when the policy is not configured.
        """
        setting = self.get_policy_setting(policy_id)
        if setting is None:
            return None
        if setting.parsed_value is not None:
            return setting.parsed_value
        return setting.raw_value

    def set_policy_config(self, policy_id, raw_value, parsed_value):
        setting = self.get_policy_setting(policy_id)
        if setting is None:
            setting = RealmPolicySetting(policy_id=policy_id)
            self.policy_settings.append(setting)
        setting.raw_value = raw_value
        setting.parsed_value = parsed_value
        setting.updated_at = utcnow()
        return setting


class RealmPolicySetting(db.Model):
    """Stored configuration of one policy in one realm"""
    __tablename__ = 'realm_policy_settings'
    __table_args__ = (db.UniqueConstraint('realm_id', 'policy_id'),)

    id = db.Column(db.Integer, primary_key=True)
    realm_id = db.Column(db.Integer, db.ForeignKey('realms.id'), nullable=False)
    policy_id = db.Column(db.String(80), nullable=False)

    raw_value = db.Column(db.String(120), nullable=False, default='')
    # Cache of the parsed raw_value; may be NULL after manual edits
    parsed_value = db.Column(db.Integer, nullable=True)

    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f'<RealmPolicySetting {self.policy_id}={self.raw_value!r}>'
