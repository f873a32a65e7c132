from django.contrib import admin
from django.urls import path
from tasklist.api import pages
from tasklist.api import views as api

urlpatterns = [
    path('admin/', admin.site.urls),

    # Health (accept with and without trailing slash)
    path('healthz', api.healthz),
    path('healthz/', api.healthz),

    # Pages
    path('', pages.index, name='index'),
    path('sign-in', pages.sign_in, name='sign-in'),
    path('sign-out', pages.sign_out, name='sign-out'),
    path('protected', pages.protected, name='protected'),
    path('protected/', pages.protected),
    path('protected/dialog/open', pages.open_add_dialog, name='open-add-dialog'),
    path('protected/dialog/close', pages.close_add_dialog, name='close-add-dialog'),
    path('protected/add', pages.add_todo, name='add-todo'),
    path('protected/todos/<int:todo_id>/toggle', pages.toggle_todo, name='toggle-todo'),
    path('protected/todos/<int:todo_id>/delete', pages.delete_todo, name='delete-todo'),

    # Auth endpoints
    path('api/auth/register', api.register),
    path('api/auth/register/', api.register),
    path('api/auth/login', api.login_view),
    path('api/auth/login/', api.login_view),
    path('api/auth/logout', api.logout_view),
    path('api/auth/logout/', api.logout_view),
    path('api/auth/me', api.me),
    path('api/auth/me/', api.me),

    # Todos collection and detail
    path('api/todos', api.todos),
    path('api/todos/', api.todos),
    path('api/todos/<int:todo_id>', api.todo_detail),
    path('api/todos/<int:todo_id>/', api.todo_detail),
]
