import uuid
from django.db import models
from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """
    自訂使用者：
    - 主鍵改成 UUID
    - email 設為 unique
    - identity 區分學生、指導老師、課程老師與管理員
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    email = models.EmailField(max_length=254, unique=True)
    real_name = models.CharField(max_length=150, blank=True)

    class Identity(models.TextChoices):
        STUDENT    = 'student',    'Student'
        ADVISER    = 'adviser',    'Adviser'
        INSTRUCTOR = 'instructor', 'Instructor'
        ADMIN      = 'admin',      'Admin'
    identity = models.CharField(max_length=16, choices=Identity.choices, default=Identity.STUDENT)

    @property
    def is_faculty(self) -> bool:
        return self.identity in (self.Identity.ADVISER, self.Identity.INSTRUCTOR, self.Identity.ADMIN)

    def __str__(self):
        return f"{self.username} ({self.identity})"
