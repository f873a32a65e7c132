import functools
import logging

from django.conf import settings
from django.contrib.auth import login, logout
from django.contrib.auth.forms import AuthenticationForm
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from tasklist.api.auth import get_current_user
from tasklist.api.store import TodoStore
from tasklist.api.task_view import TaskView

logger = logging.getLogger(__name__)

SESSION_KEY = 'task_view'


def session_gate(view):
    """Re-check identity on every request; anonymous visitors go to sign-in."""
    @functools.wraps(view)
    def gated(request, *args, **kwargs):
        user = get_current_user(request)
        if user is None:
            return redirect(settings.LOGIN_URL)
        return view(request, user, *args, **kwargs)
    return gated


def _mount(user):
    task_view = TaskView(TodoStore(user))
    task_view.load()
    return task_view


def _restore(request, user):
    state = request.session.get(SESSION_KEY)
    if state is None:
        return _mount(user)
    return TaskView.from_state(TodoStore(user), state)


def _show(request, task_view):
    request.session[SESSION_KEY] = task_view.to_state()
    return render(request, 'api/protected.html', task_view.context())


@require_http_methods(["GET"])
def index(request):
    return redirect('protected')


@require_http_methods(["GET"])
@session_gate
def protected(request, user):
    return _show(request, _mount(user))


@require_http_methods(["POST"])
@session_gate
def open_add_dialog(request, user):
    task_view = _restore(request, user)
    task_view.open_add_dialog()
    return _show(request, task_view)


@require_http_methods(["POST"])
@session_gate
def close_add_dialog(request, user):
    task_view = _restore(request, user)
    task_view.close_add_dialog()
    return _show(request, task_view)


@require_http_methods(["POST"])
@session_gate
def add_todo(request, user):
    task_view = _restore(request, user)
    task_view.set_draft_title(request.POST.get('title', ''))
    task_view.add()
    return _show(request, task_view)


@require_http_methods(["POST"])
@session_gate
def toggle_todo(request, user, todo_id: int):
    task_view = _restore(request, user)
    task_view.toggle(todo_id, request.POST.get('done') == 'true')
    return _show(request, task_view)


@require_http_methods(["POST"])
@session_gate
def delete_todo(request, user, todo_id: int):
    task_view = _restore(request, user)
    task_view.delete(todo_id)
    return _show(request, task_view)


@require_http_methods(["GET", "POST"])
def sign_in(request):
    if request.method == 'POST':
        form = AuthenticationForm(request, data=request.POST)
        if form.is_valid():
            login(request, form.get_user())
            logger.info('user %s signed in', form.get_user().pk)
            return redirect(settings.LOGIN_REDIRECT_URL)
    else:
        form = AuthenticationForm(request)
    return render(request, 'api/sign_in.html', {'form': form})


@require_http_methods(["POST"])
def sign_out(request):
    logout(request)
    return redirect(settings.LOGIN_URL)
