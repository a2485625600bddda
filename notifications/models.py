from django.db import models
from django.conf import settings


class Notification(models.Model):
    """站內通知"""

    class Type(models.TextChoices):
        PLAGIARISM_COMPLETE = 'plagiarism_complete', 'Originality Check Complete'
        CHAPTER_SUBMITTED   = 'chapter_submitted',   'New Chapter Submission'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications',
    )
    type = models.CharField(max_length=40, choices=Type.choices)
    title = models.CharField(max_length=200)
    message = models.TextField(blank=True)
    metadata = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'is_read'], name='notif_user_read_idx'),
        ]

    def __str__(self):
        return f"{self.user_id}: {self.title}"
