from rest_framework.permissions import BasePermission


class IsFacultyOrStaff(BasePermission):
    """指導老師、課程老師、管理員或 Django staff 才能通過"""
    message = "Faculty access required."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return bool(
            getattr(user, 'is_superuser', False)
            or getattr(user, 'is_staff', False)
            or getattr(user, 'is_faculty', False)
        )
