import uuid
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Submission(models.Model):
    """
    專題文件上傳紀錄（每次上傳都是新的一筆，重新上傳會遞增 version）

    原創性檢測結果直接存在這筆紀錄上（plagiarism_* 欄位），
    由 originality 的處理流程非同步更新，永遠不會刪除。
    """

    class DocumentType(models.TextChoices):
        CHAPTER     = 'chapter',     'Chapter'
        PROPOSAL    = 'proposal',    'Proposal'
        FINAL_PAPER = 'final_paper', 'Final Paper'

    class Status(models.TextChoices):
        PENDING            = 'pending',            'Pending'
        APPROVED           = 'approved',           'Approved'
        REVISIONS_REQUIRED = 'revisions_required', 'Revisions Required'
        REJECTED           = 'rejected',           'Rejected'
        LOCKED             = 'locked',             'Locked'

    class PlagiarismStatus(models.TextChoices):
        QUEUED     = 'queued',     'Queued'
        PROCESSING = 'processing', 'Processing'
        COMPLETED  = 'completed',  'Completed'
        FAILED     = 'failed',     'Failed'

    # Primary key - UUID
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Foreign keys
    project = models.ForeignKey('projects.Project', on_delete=models.CASCADE, related_name='submissions')
    submitted_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='submissions')

    # Document info
    document_type = models.CharField(max_length=20, choices=DocumentType.choices, default=DocumentType.CHAPTER)
    chapter = models.PositiveSmallIntegerField(null=True, blank=True)
    version = models.PositiveIntegerField(default=1)
    file_name = models.CharField(max_length=255)
    file_type = models.CharField(max_length=120)
    file_size = models.PositiveIntegerField(default=0)
    storage_key = models.CharField(max_length=500)

    # Review workflow
    status = models.CharField(max_length=30, choices=Status.choices, default=Status.PENDING)

    # 原創性檢測
    originality_score = models.IntegerField(
        null=True, blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    extracted_text = models.TextField(blank=True, default='')
    plagiarism_status = models.CharField(
        max_length=20,
        choices=PlagiarismStatus.choices,
        default=PlagiarismStatus.QUEUED,
    )
    plagiarism_score = models.IntegerField(
        null=True, blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    plagiarism_matches = models.JSONField(default=list, blank=True)
    plagiarism_processed_at = models.DateTimeField(null=True, blank=True)
    plagiarism_job_id = models.CharField(max_length=100, null=True, blank=True)
    plagiarism_error = models.TextField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'submissions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['project', 'chapter', 'version'], name='sub_project_chapter_idx'),
            models.Index(fields=['plagiarism_status'], name='sub_plagiarism_status_idx'),
        ]

    @property
    def plagiarism_result(self) -> dict:
        return {
            'status': self.plagiarism_status,
            'originality_score': self.plagiarism_score,
            'matched_sources': self.plagiarism_matches or [],
            'processed_at': self.plagiarism_processed_at,
            'job_id': self.plagiarism_job_id,
            'error': self.plagiarism_error,
        }

    def __str__(self):
        label = f"Ch.{self.chapter}" if self.chapter else self.get_document_type_display()
        return f"{self.project_id} {label} v{self.version}"
