"""State and operations behind the todo list page.

A TaskView mirrors the user's todos locally. Each operation makes one store
call and touches local state only after the store confirms; a failure sets
the banner message instead and leaves everything else as it was.
"""
import logging

from django.template.loader import render_to_string
from django.utils import formats, timezone
from django.utils.dateparse import parse_datetime

from tasklist.api.store import StoreError

logger = logging.getLogger(__name__)

LOAD_FAILED = 'Failed to load todos. Please try again later.'
ADD_FAILED = 'Failed to add todo. Please try again.'
UPDATE_FAILED = 'Failed to update todo status. Please try again.'
DELETE_FAILED = 'Failed to delete todo. Please try again.'

SKELETON_ROWS = 3


def format_timestamp(value):
    """Locale date and time of an ISO timestamp, or '' when there is none."""
    if not value:
        return ''
    moment = value
    if isinstance(value, str):
        try:
            moment = parse_datetime(value)
        except ValueError:
            moment = None
        if moment is None:
            return ''
    if timezone.is_aware(moment):
        moment = timezone.localtime(moment)
    return '%s %s' % (
        formats.date_format(moment, 'SHORT_DATE_FORMAT'),
        formats.time_format(moment, 'TIME_FORMAT'),
    )


class TaskView:
    def __init__(self, store, tasks=None, draft_title='', is_loading=True,
                 error_message=None, is_add_dialog_open=False):
        self.store = store
        self.tasks = list(tasks or [])
        self.draft_title = draft_title
        self.is_loading = is_loading
        self.error_message = error_message
        self.is_add_dialog_open = is_add_dialog_open

    @classmethod
    def from_state(cls, store, state):
        return cls(
            store,
            tasks=state.get('tasks'),
            draft_title=state.get('draft_title', ''),
            is_loading=state.get('is_loading', False),
            error_message=state.get('error_message'),
            is_add_dialog_open=state.get('is_add_dialog_open', False),
        )

    def to_state(self):
        return {
            'tasks': self.tasks,
            'draft_title': self.draft_title,
            'is_loading': self.is_loading,
            'error_message': self.error_message,
            'is_add_dialog_open': self.is_add_dialog_open,
        }

    def load(self):
        try:
            self.tasks = self.store.list() or []
        except StoreError as exc:
            logger.error('Error fetching todos: %s', exc)
            self.error_message = LOAD_FAILED
        finally:
            self.is_loading = False

    def set_draft_title(self, title):
        self.draft_title = title

    def open_add_dialog(self):
        self.is_add_dialog_open = True

    def close_add_dialog(self):
        self.is_add_dialog_open = False

    def add(self):
        title = self.draft_title.strip()
        if not title:
            return
        try:
            row = self.store.insert({'title': title, 'done': False})
        except StoreError as exc:
            logger.error('Error adding todo: %s', exc)
            self.error_message = ADD_FAILED
            return
        self.tasks = [row] + self.tasks
        self.draft_title = ''
        self.is_add_dialog_open = False

    def toggle(self, todo_id, current_done):
        done = not current_done
        done_time = timezone.now().isoformat() if done else None
        try:
            self.store.update(todo_id, {'done': done, 'done_time': done_time})
        except StoreError as exc:
            logger.error('Error updating todo %s: %s', todo_id, exc)
            self.error_message = UPDATE_FAILED
            return
        self.tasks = [
            dict(task, done=done, done_time=done_time) if task['id'] == todo_id else task
            for task in self.tasks
        ]

    def delete(self, todo_id):
        try:
            self.store.delete(todo_id)
        except StoreError as exc:
            logger.error('Error deleting todo %s: %s', todo_id, exc)
            self.error_message = DELETE_FAILED
            return
        self.tasks = [task for task in self.tasks if task['id'] != todo_id]

    @property
    def completed_count(self):
        return sum(1 for task in self.tasks if task['done'])

    @property
    def total_count(self):
        return len(self.tasks)

    def rows(self):
        for task in self.tasks:
            completed = ''
            if task['done'] and task.get('done_time'):
                completed = format_timestamp(task['done_time'])
            yield {
                'id': task['id'],
                'title': task['title'],
                'done': task['done'],
                'created': format_timestamp(task.get('created_at')),
                'completed': completed,
            }

    def context(self):
        return {
            'is_loading': self.is_loading,
            'skeleton_rows': range(SKELETON_ROWS),
            'error_message': self.error_message,
            'draft_title': self.draft_title,
            'is_add_dialog_open': self.is_add_dialog_open,
            'rows': list(self.rows()),
            'completed_count': self.completed_count,
            'total_count': self.total_count,
        }

    def render(self, request=None):
        return render_to_string('api/todo_list.html', self.context(), request=request)
