"""Access to the `todo` table, scoped to one user.

Every failure surfaces as :class:`StoreError`; callers never see why a call
failed, only that it did.
"""
import logging
from datetime import datetime

from django.db import DatabaseError
from django.utils.dateparse import parse_datetime

from tasklist.api.models import Todo
from tasklist.api.serializers import TodoSerializer

logger = logging.getLogger(__name__)


def _parse_timestamp(value):
    try:
        moment = parse_datetime(value)
    except ValueError:
        moment = None
    if moment is None:
        raise StoreError(f'unreadable timestamp {value!r}')
    return moment


class StoreError(Exception):
    pass


class TodoNotFound(StoreError):
    pass


class TodoStore:
    def __init__(self, user):
        self.user = user

    def _rows(self):
        return Todo.objects.filter(user=self.user)

    def list(self):
        """All of the user's todos, newest first."""
        try:
            rows = list(self._rows().order_by('-created_at', '-id'))
        except DatabaseError as exc:
            raise StoreError('could not list todos') from exc
        return [dict(row) for row in TodoSerializer(rows, many=True).data]

    def insert(self, values):
        serializer = TodoSerializer(data=values)
        if not serializer.is_valid():
            raise StoreError(f'invalid todo: {serializer.errors}')
        try:
            todo = serializer.save(user=self.user)
        except DatabaseError as exc:
            raise StoreError('could not insert todo') from exc
        logger.debug('inserted todo %s for user %s', todo.pk, self.user.pk)
        return dict(TodoSerializer(todo).data)

    def update(self, todo_id, values):
        done = bool(values.get('done'))
        done_time = values.get('done_time')
        if isinstance(done_time, str):
            done_time = _parse_timestamp(done_time)
        elif done_time is not None and not isinstance(done_time, datetime):
            raise StoreError(f'unreadable timestamp {done_time!r}')
        if done != (done_time is not None):
            raise StoreError('done_time must be set exactly when done is true')
        try:
            changed = self._rows().filter(pk=todo_id).update(done=done, done_time=done_time)
        except DatabaseError as exc:
            raise StoreError(f'could not update todo {todo_id}') from exc
        if not changed:
            raise TodoNotFound(f'todo {todo_id} not found')

    def delete(self, todo_id):
        try:
            deleted, _ = self._rows().filter(pk=todo_id).delete()
        except DatabaseError as exc:
            raise StoreError(f'could not delete todo {todo_id}') from exc
        if not deleted:
            raise TodoNotFound(f'todo {todo_id} not found')
