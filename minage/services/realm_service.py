# minage/services/realm_service.py
"""Realm configuration service: where policy values are validated and stored"""
from flask import current_app

from minage.errors import RealmNotFoundError
from minage.extensions import db
from minage.logger import get_logger
from minage.models.realm import Realm
from minage.policy import MIN_PASSWORD_AGE_POLICY_ID, get_descriptor

logger = get_logger(__name__)


class RealmService:
    """Realm lookup and policy configuration"""

    @staticmethod
    def get_realm(name):
        realm = Realm.query.filter_by(name=name).first()
        if realm is None:
            raise RealmNotFoundError(f"Realm '{name}' not found")
        return realm

    @staticmethod
    def get_or_create_realm(name):
        """Fetch a realm, creating it with the configured default policy value"""
        realm = Realm.query.filter_by(name=name).first()
        if realm is not None:
            return realm

        realm = Realm(name=name)
        db.session.add(realm)
        RealmService.set_min_password_age(realm, current_app.config['MIN_PASSWORD_AGE'])
        logger.info("Created realm %s", name)
        return realm

    @staticmethod
    def set_min_password_age(realm, raw_value):
        """
        Validate and store the minimum password age of a realm.

        The value is parsed before anything is written, so an invalid value is
        never persisted. The caller commits the session.

        Raises:
            PolicyConfigError: If raw_value is not a valid duration
        """
        descriptor = get_descriptor(MIN_PASSWORD_AGE_POLICY_ID)
        if raw_value is None:
            raw_value = descriptor.default_config_value

        seconds = descriptor.create().parse_config(raw_value)
        realm.set_policy_config(descriptor.policy_id, raw_value.strip(), seconds)
        logger.info("Realm %s minimum password age set to %r (%d seconds)",
                    realm.name, raw_value, seconds)
        return seconds

    @staticmethod
    def get_min_password_age(realm):
        """Raw and parsed minimum password age of a realm"""
        setting = realm.get_policy_setting(MIN_PASSWORD_AGE_POLICY_ID)
        if setting is None:
            return {'value': get_descriptor(MIN_PASSWORD_AGE_POLICY_ID).default_config_value,
                    'seconds': 0}
        return {'value': setting.raw_value, 'seconds': setting.parsed_value}
