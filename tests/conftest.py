# tests/conftest.py

import pytest
from django.contrib.auth.models import User

from tasklist.api.store import TodoStore


@pytest.fixture()
def user(db) -> User:
    return User.objects.create_user(username="ann@example.com", email="ann@example.com", password="s3cret-pass")


@pytest.fixture()
def other_user(db) -> User:
    return User.objects.create_user(username="bob@example.com", email="bob@example.com", password="s3cret-pass")


@pytest.fixture()
def store(user) -> TodoStore:
    return TodoStore(user)


@pytest.fixture()
def signed_in_client(client, user):
    client.force_login(user)
    return client
