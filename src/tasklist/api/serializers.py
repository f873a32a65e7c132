from rest_framework import serializers
from tasklist.api.models import Todo

class TodoSerializer(serializers.ModelSerializer):
    """Row shape shared by the store, the session copy and the JSON API."""

    class Meta:
        model = Todo
        fields = ['id', 'title', 'done', 'created_at', 'done_time']
        # rows are always created open; done only changes through update
        read_only_fields = ['id', 'done', 'created_at', 'done_time']
