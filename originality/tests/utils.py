# originality/tests/utils.py
"""
測試共用的建立資料工具
"""
import shutil
import tempfile
import uuid

from django.contrib.auth import get_user_model
from django.test import override_settings

from projects.models import Project
from submissions import storage
from submissions.models import Submission

User = get_user_model()

LONG_TEXT = (
    "Our capstone project builds a scheduling assistant for university clinics. "
    "The system collects appointment requests, ranks them by urgency and notifies "
    "the nursing staff whenever a slot becomes available for a waiting patient."
)


def make_user(identity=User.Identity.STUDENT, **kwargs):
    unique_id = str(uuid.uuid4())[:8]
    return User.objects.create_user(
        username=f'user_{unique_id}',
        email=f'user_{unique_id}@example.com',
        password='testpass123',
        identity=identity,
        **kwargs
    )


def make_project(title='Clinic Scheduler', adviser=None):
    return Project.objects.create(title=title, adviser=adviser)


def make_submission(project, user, text=None, chapter=1, mime_type='text/plain', **fields):
    """
    建立一筆 queued 的 submission；給 text 時會真的寫入儲存空間
    """
    storage_key = f'projects/{project.pk}/chapters/{chapter}/v1/missing.txt'
    if text is not None:
        storage_key = storage.upload(
            storage.build_key(project.pk, chapter, 1, 'chapter.txt'),
            text.encode('utf-8'),
        )
    return Submission.objects.create(
        project=project,
        submitted_by=user,
        chapter=chapter,
        file_name='chapter.txt',
        file_type=mime_type,
        file_size=len(text or ''),
        storage_key=storage_key,
        **fields
    )


def run_inline(func, *args, name=None, **kwargs):
    """取代 run_in_background，讓背景工作在測試的 transaction 內同步執行"""
    func(*args, **kwargs)


class TempMediaMixin:
    """上傳檔案寫到暫存目錄，測試結束後刪除"""

    def setUp(self):
        super().setUp()
        media_dir = tempfile.mkdtemp()
        media_override = override_settings(MEDIA_ROOT=media_dir)
        media_override.enable()
        self.addCleanup(shutil.rmtree, media_dir, ignore_errors=True)
        self.addCleanup(media_override.disable)
