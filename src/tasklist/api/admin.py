from django.contrib import admin
from tasklist.api.models import Todo

@admin.register(Todo)
class TodoAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'user', 'done', 'created_at', 'done_time')
    list_filter = ('done',)
    search_fields = ('title',)
