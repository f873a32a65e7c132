from django.db import models
from django.contrib.auth.models import User

class Todo(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='todos')
    title = models.CharField(max_length=255)
    done = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    done_time = models.DateTimeField(blank=True, null=True)  # set iff done

    class Meta:
        db_table = 'todo'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.title
