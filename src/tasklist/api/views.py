import json
import logging
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.contrib.auth import authenticate, login, logout
from django.contrib.auth.models import User
from django.utils import timezone
from django.views.decorators.http import require_http_methods
from tasklist.api.auth import get_current_user
from tasklist.api.store import StoreError, TodoNotFound, TodoStore

logger = logging.getLogger(__name__)


def _body(request):
    try:
        body = json.loads(request.body or b"{}")
    except ValueError:
        body = {}
    return body if isinstance(body, dict) else {}

@require_http_methods(["GET"])
def healthz(request):
    return JsonResponse({"ok": True})

@csrf_exempt
@require_http_methods(["POST"])
def register(request):
    body = _body(request)
    email = (body.get('email') or '').strip().lower()
    password = body.get('password') or ''
    if not email or not password or len(password) < 8:
        return JsonResponse({"error": "Invalid input"}, status=400)
    if User.objects.filter(username=email).exists():
        return JsonResponse({"error": "Email already registered"}, status=409)
    user = User.objects.create_user(username=email, email=email, password=password)
    login(request, user)
    return JsonResponse({"ok": True, "user": {"id": user.id, "email": email}})

@csrf_exempt
@require_http_methods(["POST"])
def login_view(request):
    body = _body(request)
    email = (body.get('email') or '').strip().lower()
    password = body.get('password') or ''
    user = authenticate(request, username=email, password=password)
    if user is None:
        return JsonResponse({"error": "Invalid credentials"}, status=401)
    login(request, user)
    return JsonResponse({"ok": True, "user": {"id": user.id, "email": email}})

@csrf_exempt
@require_http_methods(["POST"])
def logout_view(request):
    logout(request)
    return JsonResponse({"ok": True})

@require_http_methods(["GET"])
def me(request):
    user = get_current_user(request)
    if user is not None:
        return JsonResponse({"user": {"id": user.id, "email": user.username}})
    return JsonResponse({"user": None})

@csrf_exempt
@require_http_methods(["GET", "POST"])
def todos(request):
    user = get_current_user(request)
    if user is None:
        return JsonResponse({"error": "Unauthorized"}, status=401)
    store = TodoStore(user)
    if request.method == 'GET':
        try:
            rows = store.list()
        except StoreError as exc:
            logger.error('Error fetching todos: %s', exc)
            return JsonResponse({"error": "Failed to load todos"}, status=500)
        return JsonResponse({"todos": rows})
    body = _body(request)
    title = body.get('title')
    title = title.strip() if isinstance(title, str) else ''
    if not title:
        return JsonResponse({"error": "title required"}, status=400)
    try:
        row = store.insert({'title': title, 'done': False})
    except StoreError as exc:
        logger.error('Error adding todo: %s', exc)
        return JsonResponse({"error": "Failed to add todo"}, status=400)
    return JsonResponse(row, status=201)

@csrf_exempt
@require_http_methods(["PATCH", "DELETE"])
def todo_detail(request, todo_id: int):
    user = get_current_user(request)
    if user is None:
        return JsonResponse({"error": "Unauthorized"}, status=401)
    store = TodoStore(user)
    if request.method == 'DELETE':
        try:
            store.delete(todo_id)
        except TodoNotFound:
            return JsonResponse({"error": "Todo not found"}, status=404)
        except StoreError as exc:
            logger.error('Error deleting todo %s: %s', todo_id, exc)
            return JsonResponse({"error": "Failed to delete todo"}, status=400)
        return JsonResponse({"ok": True})
    body = _body(request)
    if not isinstance(body.get('done'), bool):
        return JsonResponse({"error": "done required"}, status=400)
    done = body['done']
    if done:
        done_time = body.get('done_time') or timezone.now()
    else:
        done_time = None
    try:
        store.update(todo_id, {'done': done, 'done_time': done_time})
    except TodoNotFound:
        return JsonResponse({"error": "Todo not found"}, status=404)
    except StoreError as exc:
        logger.error('Error updating todo %s: %s', todo_id, exc)
        return JsonResponse({"error": "Failed to update todo"}, status=400)
    return JsonResponse({"ok": True})
