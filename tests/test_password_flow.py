"""
End-to-end password change tests through the Flask host.
"""
import pytest

from minage.errors import PasswordPolicyViolation
from minage.extensions import db
from minage.models.realm import Realm
from minage.models.user import User
from minage.policy import MIN_PASSWORD_AGE_POLICY_ID, UPDATE_PASSWORD_ACTION
from minage.services.auth_services import AuthService
from minage.services.realm_service import RealmService

from conftest import USER_PASSWORD, backdate_password, login, login_admin, set_min_age


def change_password(client, current, new):
    return client.post('/auth/update-password', json={
        'current_password': current,
        'new_password': new,
    })


class TestPolicyConfiguration:
    """Administrator configuration of the minimum password age"""

    def test_set_and_get(self, client):
        response = set_min_age(client, '1:d')
        assert response.status_code == 200
        assert response.get_json() == {'value': '1:d', 'seconds': 86400}

        login_admin(client)
        response = client.get('/admin/realms/master/policies/minimum-password-age')
        assert response.get_json() == {'value': '1:d', 'seconds': 86400}

    def test_invalid_value_is_not_saved(self, client):
        set_min_age(client, '2:h')

        response = set_min_age(client, '5:x')
        assert response.status_code == 400
        body = response.get_json()
        assert body['value'] == '5:x'
        assert 'Invalid unit' in body['error']

        login_admin(client)
        response = client.get('/admin/realms/master/policies/minimum-password-age')
        assert response.get_json() == {'value': '2:h', 'seconds': 7200}

    def test_numeric_value_accepted(self, client):
        response = set_min_age(client, 90)
        assert response.get_json() == {'value': '90', 'seconds': 90}

    @pytest.mark.parametrize("value", ["999999999999999:d", "99999999999999999999"])
    def test_out_of_range_value_rejected(self, client, value):
        set_min_age(client, '1:d')

        response = set_min_age(client, value)
        assert response.status_code == 400
        assert response.get_json()['value'] == value

        login_admin(client)
        response = client.get('/admin/realms/master/policies/minimum-password-age')
        assert response.get_json() == {'value': '1:d', 'seconds': 86400}

    @pytest.mark.parametrize("request_kwargs", [
        {'data': '1:d'},
        {'json': {}},
        {'json': {'valu': '2:h'}},
        {'json': ['1:d']},
    ])
    def test_missing_value_rejected(self, client, request_kwargs):
        set_min_age(client, '1:d')
        login_admin(client)

        response = client.put('/admin/realms/master/policies/minimum-password-age',
                              **request_kwargs)
        assert response.status_code == 400
        assert response.get_json() == {'error': "Missing 'value'"}

        response = client.get('/admin/realms/master/policies/minimum-password-age')
        assert response.get_json() == {'value': '1:d', 'seconds': 86400}

    def test_unknown_realm(self, client):
        login_admin(client)
        response = client.get('/admin/realms/nowhere/policies/minimum-password-age')
        assert response.status_code == 404

    def test_requires_admin(self, client, alice):
        assert client.get('/admin/realms/master/policies/minimum-password-age').status_code == 401

        login(client, 'alice', USER_PASSWORD)
        response = client.put('/admin/realms/master/policies/minimum-password-age',
                              json={'value': '0'})
        assert response.status_code == 403


class TestSelfServiceChange:
    """Password changes made by the user"""

    def test_disabled_policy_allows_immediate_change(self, client, alice):
        login(client, 'alice', USER_PASSWORD)
        response = change_password(client, USER_PASSWORD, 'alice-password-2')
        assert response.status_code == 200

    def test_recent_password_is_rejected(self, client, alice):
        set_min_age(client, '1:d')
        login(client, 'alice', USER_PASSWORD)

        response = change_password(client, USER_PASSWORD, 'alice-password-2')
        assert response.status_code == 400
        body = response.get_json()
        assert body['errorKindId'] == 'minPasswordAgeNotReached'
        assert body['params'].endswith('hour(s)')
        assert body['error'] == f"Password cannot be changed yet. Please wait {body['params']}."

        # The old password still works
        client.post('/auth/logout')
        assert login(client, 'alice', USER_PASSWORD).status_code == 200

    def test_old_password_can_be_changed(self, client, alice):
        set_min_age(client, '1:d')
        backdate_password(alice, hours=25)
        login(client, 'alice', USER_PASSWORD)

        response = change_password(client, USER_PASSWORD, 'alice-password-2')
        assert response.status_code == 200

        # The new password is now the current credential
        response = change_password(client, 'alice-password-2', 'alice-password-3')
        assert response.status_code == 400
        assert response.get_json()['errorKindId'] == 'minPasswordAgeNotReached'

    def test_change_records_history(self, app, client, alice):
        login(client, 'alice', USER_PASSWORD)
        change_password(client, USER_PASSWORD, 'alice-password-2')

        user = User.query.filter_by(username='alice').first()
        assert len(user.password_history) == 1
        assert len(user.credential_records()) == 2

    def test_history_is_trimmed(self, app, client, alice):
        app.config['PASSWORD_HISTORY_COUNT'] = 2
        login(client, 'alice', USER_PASSWORD)

        current = USER_PASSWORD
        for n in range(2, 6):
            new = f'alice-password-{n}'
            assert change_password(client, current, new).status_code == 200
            current = new

        user = User.query.filter_by(username='alice').first()
        assert len(user.password_history) == 2

    def test_wrong_current_password(self, client, alice):
        login(client, 'alice', USER_PASSWORD)
        response = change_password(client, 'not-my-password', 'alice-password-2')
        assert response.status_code == 401

    def test_short_password(self, client, alice):
        login(client, 'alice', USER_PASSWORD)
        response = change_password(client, USER_PASSWORD, 'short')
        assert response.status_code == 400

    def test_requires_login(self, client):
        response = change_password(client, USER_PASSWORD, 'alice-password-2')
        assert response.status_code == 401

    def test_login_session_holds_only_user_id(self, client, alice):
        login(client, 'alice', USER_PASSWORD)
        with client.session_transaction() as sess:
            assert dict(sess) == {'user_id': alice.id}


class TestBypass:
    """Administrative resets and forced password updates"""

    def test_admin_reset_ignores_min_age(self, client, alice):
        set_min_age(client, '1:d')
        login_admin(client)

        response = client.post('/admin/realms/master/users/alice/reset-password',
                               json={'password': 'reset-password-1'})
        assert response.status_code == 200
        assert response.get_json()['requiredActions'] == []

    def test_temporary_password_can_be_replaced_immediately(self, client, alice):
        set_min_age(client, '1:d')
        login_admin(client)
        response = client.post('/admin/realms/master/users/alice/reset-password',
                               json={'password': 'temporary-pass-1', 'temporary': True})
        assert response.get_json()['requiredActions'] == [UPDATE_PASSWORD_ACTION]
        client.post('/auth/logout')

        response = login(client, 'alice', 'temporary-pass-1')
        assert response.get_json()['requiredActions'] == [UPDATE_PASSWORD_ACTION]

        response = change_password(client, 'temporary-pass-1', 'alice-password-2')
        assert response.status_code == 200

        user = User.query.filter_by(username='alice').first()
        assert UPDATE_PASSWORD_ACTION not in user.get_required_actions()

        # Forced reset done, the policy applies again
        response = change_password(client, 'alice-password-2', 'alice-password-3')
        assert response.status_code == 400

    def test_reset_unknown_user(self, client):
        login_admin(client)
        response = client.post('/admin/realms/master/users/nobody/reset-password',
                               json={'password': 'reset-password-1'})
        assert response.status_code == 404


class TestHostIntegration:
    """How the service layer feeds the policy engine"""

    def test_context_outside_request(self, app, alice):
        context = AuthService.build_evaluation_context(alice)
        assert context.request_path is None
        assert len(context.credentials) == 1

    def test_context_inside_request(self, app, alice):
        with app.test_request_context('/auth/update-password'):
            context = AuthService.build_evaluation_context(alice)
        assert context.request_path == '/auth/update-password'

    def test_first_password_never_blocked(self, app):
        realm = Realm.query.filter_by(name='master').first()
        realm.set_policy_config(MIN_PASSWORD_AGE_POLICY_ID, '1:d', 86400)
        user = AuthService.register(realm, 'bob')
        db.session.commit()

        assert user.credential_records() == []
        AuthService.set_password(user, 'bob-password-1')
        db.session.commit()
        assert user.password_hash is not None

    def test_unparsed_raw_value_is_reparsed(self, app, alice):
        realm = Realm.query.filter_by(name='master').first()
        realm.set_policy_config(MIN_PASSWORD_AGE_POLICY_ID, '1:d', None)
        db.session.commit()

        assert realm.get_policy_config(MIN_PASSWORD_AGE_POLICY_ID) == '1:d'
        with app.test_request_context('/auth/update-password'):
            with pytest.raises(PasswordPolicyViolation) as excinfo:
                AuthService.check_password_policy(alice)
        assert excinfo.value.result.error_kind_id == 'minPasswordAgeNotReached'

    def test_corrupt_raw_value_disables(self, app, alice):
        realm = Realm.query.filter_by(name='master').first()
        realm.set_policy_config(MIN_PASSWORD_AGE_POLICY_ID, 'garbage', None)
        db.session.commit()

        with app.test_request_context('/auth/update-password'):
            result = AuthService.check_password_policy(alice)
        assert result.allowed

    def test_service_default_when_value_omitted(self, app):
        realm = Realm.query.filter_by(name='master').first()
        assert RealmService.set_min_password_age(realm, None) == 0
        assert RealmService.get_min_password_age(realm) == {'value': '0', 'seconds': 0}
