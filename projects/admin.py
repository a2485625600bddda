from django.contrib import admin
from unfold.admin import ModelAdmin
from .models import Project


@admin.register(Project)
class ProjectAdmin(ModelAdmin):
    list_display = ('title', 'adviser', 'created_at')
    search_fields = ('title', 'adviser__username')
    ordering = ('-created_at',)
    list_per_page = 25
