from django.db import models

from . import conf


class OriginalityJobRecord(models.Model):
    """
    佇列工作的執行紀錄，供維運檢查用

    只保留最近 200 筆完成、500 筆失敗的紀錄，其餘自動清除。
    與 Submission 上的檢測結果無關，清除紀錄不會影響結果。
    """

    class State(models.TextChoices):
        COMPLETED = 'completed', 'Completed'
        FAILED    = 'failed',    'Failed'

    job_id = models.CharField(max_length=100, db_index=True)
    submission_id = models.UUIDField(db_index=True)
    state = models.CharField(max_length=20, choices=State.choices)
    attempts = models.PositiveSmallIntegerField(default=1)
    originality_score = models.IntegerField(null=True, blank=True)
    error_message = models.TextField(blank=True)
    finished_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'originality_job_records'
        ordering = ['-finished_at', '-id']
        indexes = [
            models.Index(fields=['state', 'finished_at'], name='orig_job_state_idx'),
        ]

    @classmethod
    def retention_limit(cls, state):
        if state == cls.State.COMPLETED:
            return conf.get('RETAIN_COMPLETED')
        return conf.get('RETAIN_FAILED')

    @classmethod
    def record(cls, job_id, submission_id, state, attempts=1, originality_score=None, error_message=''):
        """新增一筆紀錄並清掉超過保留數量的舊紀錄"""
        record = cls.objects.create(
            job_id=job_id,
            submission_id=submission_id,
            state=state,
            attempts=attempts,
            originality_score=originality_score,
            error_message=error_message or '',
        )
        cls.prune(state)
        return record

    @classmethod
    def prune(cls, state):
        """
        Returns:
            int: 刪除的筆數
        """
        keep_ids = list(
            cls.objects.filter(state=state)
            .order_by('-finished_at', '-id')
            .values_list('id', flat=True)[:cls.retention_limit(state)]
        )
        deleted, _ = cls.objects.filter(state=state).exclude(id__in=keep_ids).delete()
        return deleted

    def __str__(self):
        return f"{self.job_id} ({self.state})"
