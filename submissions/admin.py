from django.contrib import admin
from unfold.admin import ModelAdmin
from unfold.decorators import display
from .models import Submission


@admin.register(Submission)
class SubmissionAdmin(ModelAdmin):
    """文件上傳紀錄 Admin - 原創性檢測欄位唯讀"""

    list_display = (
        'id', 'project', 'submitted_by', 'document_type', 'chapter', 'version',
        'display_plagiarism_status', 'plagiarism_score', 'created_at',
    )
    list_filter = ('plagiarism_status', 'document_type', 'status', 'created_at')
    search_fields = ('project__title', 'submitted_by__username', 'file_name')
    ordering = ('-created_at',)
    list_per_page = 25

    readonly_fields = (
        'storage_key', 'file_type', 'file_size', 'originality_score',
        'plagiarism_status', 'plagiarism_score', 'plagiarism_matches',
        'plagiarism_processed_at', 'plagiarism_job_id', 'plagiarism_error',
        'created_at',
    )

    fieldsets = (
        ("文件資訊", {
            "fields": ("project", "submitted_by", "document_type", "chapter", "version", "file_name", "status"),
        }),
        ("檔案", {
            "fields": ("storage_key", "file_type", "file_size"),
            "classes": ["collapse"],
        }),
        ("原創性檢測", {
            "fields": (
                "plagiarism_status", "plagiarism_score", "plagiarism_matches",
                "plagiarism_processed_at", "plagiarism_job_id", "plagiarism_error",
            ),
        }),
        ("時間戳記", {
            "fields": ("created_at",),
            "classes": ["collapse"],
        }),
    )

    @display(description="檢測狀態", label={
        "queued": "info",
        "processing": "warning",
        "completed": "success",
        "failed": "danger",
    })
    def display_plagiarism_status(self, instance):
        return instance.plagiarism_status
