from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from unfold.admin import ModelAdmin
from unfold.forms import AdminPasswordChangeForm, UserChangeForm, UserCreationForm
from unfold.decorators import display
from .models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin, ModelAdmin):
    form = UserChangeForm
    add_form = UserCreationForm
    change_password_form = AdminPasswordChangeForm

    fieldsets = (
        (None, {'fields': ('username', 'password')}),
        ('個人資訊', {'fields': ('real_name', 'email')}),
        ('角色', {'fields': ('identity',)}),
        ('權限', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('重要日期', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('username', 'email', 'real_name', 'identity', 'password1', 'password2')
        }),
    )
    list_display = ('username', 'email', 'real_name', 'display_identity', 'is_staff', 'is_active', 'date_joined')
    list_filter = ('identity', 'is_staff', 'is_superuser', 'is_active')
    search_fields = ('username', 'email', 'real_name')
    ordering = ('-date_joined',)
    list_per_page = 25

    @display(description="身份", label={
        "student": "info",
        "adviser": "success",
        "instructor": "success",
        "admin": "danger",
    })
    def display_identity(self, instance):
        return instance.identity
