# tests/test_pages.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from tasklist.api import auth
from tasklist.api.models import Todo
from tasklist.api.store import StoreError, TodoStore
from tasklist.api.task_view import LOAD_FAILED, UPDATE_FAILED

pytestmark = pytest.mark.django_db


def page(response) -> str:
    assert response.status_code == 200
    return response.content.decode()


@pytest.mark.parametrize(
    "method, url",
    [
        ("get", "/protected"),
        ("post", "/protected/add"),
        ("post", "/protected/dialog/open"),
        ("post", "/protected/todos/1/toggle"),
        ("post", "/protected/todos/1/delete"),
    ],
)
def test_anonymous_visitor_is_sent_to_sign_in(client, method, url) -> None:
    response = getattr(client, method)(url)
    assert response.status_code == 302
    assert response["Location"] == "/sign-in"


def test_identity_lookup_failure_counts_as_signed_out() -> None:
    class BrokenUser:
        @property
        def is_authenticated(self):
            raise RuntimeError("auth backend down")

    request = SimpleNamespace(user=BrokenUser())
    assert auth.get_current_user(request) is None


def test_index_redirects_to_protected(client) -> None:
    response = client.get("/")
    assert response.status_code == 302
    assert response["Location"] == "/protected"


def test_empty_store_renders_placeholder(signed_in_client) -> None:
    html = page(signed_in_client.get("/protected"))
    assert "Your Tasks" in html
    assert "No todos yet. Add your first task!" in html
    assert "0 of 0 tasks completed" in html


def test_add_toggle_delete_flow(signed_in_client, user) -> None:
    signed_in_client.get("/protected")
    html = page(signed_in_client.post("/protected/dialog/open"))
    assert "<dialog" in html

    html = page(signed_in_client.post("/protected/add", {"title": "Buy milk"}))
    todo = Todo.objects.get(user=user)
    assert todo.title == "Buy milk"
    assert "Buy milk" in html
    assert "<dialog" not in html
    assert "0 of 1 tasks completed" in html

    html = page(signed_in_client.post(f"/protected/todos/{todo.id}/toggle", {"done": "false"}))
    todo.refresh_from_db()
    assert todo.done is True
    assert todo.done_time is not None
    assert 'class="line-through">Buy milk' in html
    assert " checked>" in html
    assert "1 of 1 tasks completed" in html

    html = page(signed_in_client.post(f"/protected/todos/{todo.id}/delete"))
    assert not Todo.objects.filter(pk=todo.id).exists()
    assert "No todos yet" in html


def test_blank_title_keeps_dialog_open(signed_in_client, user) -> None:
    signed_in_client.get("/protected")
    signed_in_client.post("/protected/dialog/open")

    html = page(signed_in_client.post("/protected/add", {"title": "   "}))

    assert "<dialog" in html
    assert not Todo.objects.filter(user=user).exists()


def test_cancel_closes_dialog(signed_in_client) -> None:
    signed_in_client.get("/protected")
    signed_in_client.post("/protected/dialog/open")
    html = page(signed_in_client.post("/protected/dialog/close"))
    assert "<dialog" not in html


def test_mutations_reuse_session_copy_without_refetch(signed_in_client, user, monkeypatch) -> None:
    TodoStore(user).insert({"title": "one", "done": False})
    signed_in_client.get("/protected")

    def fail_list(self):
        raise AssertionError("list should not be called after mount")

    monkeypatch.setattr(TodoStore, "list", fail_list)
    html = page(signed_in_client.post("/protected/add", {"title": "two"}))
    assert "2 tasks completed" in html


def test_failed_update_shows_banner_and_keeps_row_checked(signed_in_client, user, monkeypatch) -> None:
    row = TodoStore(user).insert({"title": "Buy milk", "done": False})
    signed_in_client.get("/protected")
    signed_in_client.post(f"/protected/todos/{row['id']}/toggle", {"done": "false"})

    def fail_update(self, todo_id, values):
        raise StoreError("network down")

    monkeypatch.setattr(TodoStore, "update", fail_update)
    html = page(signed_in_client.post(f"/protected/todos/{row['id']}/toggle", {"done": "true"}))

    assert UPDATE_FAILED in html
    assert 'class="line-through">Buy milk' in html
    assert "1 of 1 tasks completed" in html


def test_load_failure_shows_banner(signed_in_client, monkeypatch) -> None:
    def fail_list(self):
        raise StoreError("db gone")

    monkeypatch.setattr(TodoStore, "list", fail_list)
    html = page(signed_in_client.get("/protected"))
    assert LOAD_FAILED in html
    assert "No todos yet" in html


def test_sign_in_form_logs_user_in(client, user) -> None:
    assert client.get("/sign-in").status_code == 200

    response = client.post("/sign-in", {"username": "ann@example.com", "password": "s3cret-pass"})

    assert response.status_code == 302
    assert response["Location"] == "/protected"
    assert client.get("/protected").status_code == 200


def test_sign_in_rejects_bad_password(client, user) -> None:
    response = client.post("/sign-in", {"username": "ann@example.com", "password": "nope"})
    assert response.status_code == 200
    assert client.get("/protected").status_code == 302


def test_sign_out_closes_the_gate(signed_in_client) -> None:
    response = signed_in_client.post("/sign-out")
    assert response["Location"] == "/sign-in"
    assert signed_in_client.get("/protected").status_code == 302
