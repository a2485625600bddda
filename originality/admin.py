from django.contrib import admin
from unfold.admin import ModelAdmin
from unfold.decorators import display
from .models import OriginalityJobRecord


@admin.register(OriginalityJobRecord)
class OriginalityJobRecordAdmin(ModelAdmin):
    """檢測工作紀錄 Admin - 唯讀"""

    list_display = (
        'job_id', 'submission_id', 'display_state', 'attempts',
        'originality_score', 'finished_at'
    )
    list_filter = ('state', 'finished_at')
    search_fields = ('job_id', 'submission_id')
    ordering = ('-finished_at',)
    list_per_page = 25

    readonly_fields = (
        'job_id', 'submission_id', 'state', 'attempts',
        'originality_score', 'error_message', 'finished_at'
    )

    fieldsets = (
        ("工作資訊", {
            "fields": ("job_id", "submission_id", "state", "attempts"),
        }),
        ("結果", {
            "fields": ("originality_score",),
        }),
        ("錯誤訊息", {
            "fields": ("error_message",),
            "classes": ["collapse"],
        }),
    )

    @display(description="狀態", label={
        "completed": "success",
        "failed": "danger",
    })
    def display_state(self, instance):
        return instance.state

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
