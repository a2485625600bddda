import uuid
from django.db import models
from django.conf import settings


class Project(models.Model):
    """
    畢業專題 (capstone project)

    團隊、題目審核等流程不在此處實作，這裡只保留原創性檢測需要的欄位：
    標題（比對來源顯示用）與指導老師。
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    adviser = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='advised_projects',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'projects'
        ordering = ['-created_at']

    def __str__(self):
        return self.title
