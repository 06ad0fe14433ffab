"""Application tests for registration, login, profile and removal."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.auth.login import LogIn, OpenSession, resolve_user
from storefront.auth.session import Session
from storefront.exceptions import AuthenticationError
from storefront.user.profile import UpdateProfile
from storefront.user.registration import RegisterUser
from storefront.user.removal import DeleteUser
from storefront.user.user import Role, User
from storefront.webhook.registration import RegisterWebhook
from storefront.webhook.webhook import Webhook


def _register(email="ada@example.com", password="s3cret", is_seller=False):
    command = RegisterUser(name="Ada", email=email, password=password, is_seller=is_seller)
    return current_domain.process(command, asynchronous=False)


def _log_in(email="ada@example.com", password="s3cret"):
    return current_domain.process(LogIn(email=email, password=password), asynchronous=False)


class TestRegisterUser:
    def test_register_persists_buyer(self):
        user_id = _register()
        user = current_domain.repository_for(User).get(user_id)
        assert user.email == "ada@example.com"
        assert user.role == Role.BUYER.value
        assert user.balance == 0.0

    def test_register_seller(self):
        user = current_domain.repository_for(User).get(_register(is_seller=True))
        assert user.role == Role.SELLER.value

    def test_password_is_not_stored_in_plain_text(self):
        user = current_domain.repository_for(User).get(_register(password="s3cret"))
        assert "s3cret" not in user.password_hash

    def test_duplicate_email_is_rejected(self):
        _register()
        with pytest.raises(ValidationError) as exc:
            _register()
        assert "User already exists" in str(exc.value)


class TestLogIn:
    def test_login_issues_token_for_user(self):
        user_id = _register()
        token = _log_in()
        assert str(resolve_user(token).id) == user_id

    def test_wrong_password_is_rejected(self):
        _register()
        with pytest.raises(AuthenticationError) as exc:
            _log_in(password="wrong")
        assert exc.value.message == "Invalid email or password"

    def test_unknown_email_is_rejected(self):
        with pytest.raises(AuthenticationError):
            _log_in(email="nobody@example.com")

    def test_open_session_for_unknown_user(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(OpenSession(user_id="missing"), asynchronous=False)


class TestResolveUser:
    def test_missing_token(self):
        with pytest.raises(AuthenticationError) as exc:
            resolve_user(None)
        assert exc.value.message == "Not authorized, no token"

    def test_unknown_token(self):
        with pytest.raises(AuthenticationError) as exc:
            resolve_user("not-a-token")
        assert exc.value.message == "Not authorized, token failed"


class TestUpdateProfile:
    def test_update_name_and_password(self):
        user_id = _register()
        current_domain.process(UpdateProfile(user_id=user_id, name="Ada L.", password="n3w"), asynchronous=False)

        user = current_domain.repository_for(User).get(user_id)
        assert user.name == "Ada L."
        assert user.email == "ada@example.com"
        assert _log_in(password="n3w")

    def test_email_taken_by_another_user(self):
        user_id = _register()
        _register(email="grace@example.com")
        with pytest.raises(ValidationError):
            current_domain.process(UpdateProfile(user_id=user_id, email="grace@example.com"), asynchronous=False)


class TestDeleteUser:
    def test_delete_removes_user_sessions_and_webhook(self):
        user_id = _register()
        token = _log_in()
        current_domain.process(
            RegisterWebhook(user_id=user_id, url="https://hooks.example.com/a"), asynchronous=False
        )

        current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(User).get(user_id)
        assert current_domain.repository_for(Session).find_by_token(token) is None
        assert current_domain.repository_for(Webhook).find_for_user(user_id) is None

    def test_delete_unknown_user(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(DeleteUser(user_id="missing"), asynchronous=False)
