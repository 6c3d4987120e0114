import pytest
from django.test import Client

from apps.accounts.models import Role, User


def _user(username, role, **extra):
    return User.objects.create_user(
        username=username,
        password='pass-12345',
        role=role,
        display_name=extra.pop('display_name', username.title()),
        **extra,
    )


def _logged_in(user):
    http = Client()
    http.force_login(user, backend='django.contrib.auth.backends.ModelBackend')
    return http


@pytest.fixture
def admin_account(db):
    return _user('boss', Role.ADMIN)


@pytest.fixture
def client_account(db):
    return _user('acme', Role.CLIENT, company_name='Acme Imports', phone='13900000000')


@pytest.fixture
def other_client_account(db):
    return _user('globex', Role.CLIENT, company_name='Globex')


@pytest.fixture
def operator_account(db):
    return _user('dock', Role.OPERATOR)


@pytest.fixture
def client_http(client_account):
    return _logged_in(client_account)


@pytest.fixture
def other_client_http(other_client_account):
    return _logged_in(other_client_account)


@pytest.fixture
def admin_http(admin_account):
    return _logged_in(admin_account)


@pytest.fixture
def operator_http(operator_account):
    return _logged_in(operator_account)
