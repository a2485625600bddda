from django.contrib import admin
from unfold.admin import ModelAdmin
from unfold.decorators import display
from .models import Notification


@admin.register(Notification)
class NotificationAdmin(ModelAdmin):
    """站內通知 Admin - 唯讀"""

    list_display = ('id', 'user', 'display_type', 'title', 'is_read', 'created_at')
    list_filter = ('type', 'is_read', 'created_at')
    search_fields = ('user__username', 'title')
    ordering = ('-created_at',)
    list_per_page = 25
    readonly_fields = ('user', 'type', 'title', 'message', 'metadata', 'created_at')

    @display(description="類型", label={
        "plagiarism_complete": "info",
        "chapter_submitted": "success",
    })
    def display_type(self, instance):
        return instance.type

    def has_add_permission(self, request):
        return False
