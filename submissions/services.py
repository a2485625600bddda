"""
文件上傳流程中與原創性檢測相關的部分

上傳 → 建立 Submission (plagiarism_status=queued) → 排入檢測佇列；
佇列不可用時改由背景執行緒直接執行同一個檢測流程。
"""

import logging

from originality import fallback
from originality.jobs import CheckJob
from originality.queue import get_queue

from . import storage
from .models import Submission

logger = logging.getLogger(__name__)


def schedule_originality_check(submission, queue=None):
    """
    為 submission 排程一次原創性檢測

    Args:
        submission: Submission instance
        queue: OriginalityQueue，預設使用 app 啟動時建立的那一個

    Returns:
        str | None: job id；None 代表 broker 不可用，已改走背景 fallback
    """
    queue = queue or get_queue()
    job = CheckJob.for_submission(submission)

    job_id = queue.enqueue(job)
    if job_id is None:
        logger.info(f"[Submission] Broker unavailable, running originality check for {submission.pk} in background")
        fallback.dispatch(job)
        return None

    Submission.objects.filter(pk=submission.pk).update(plagiarism_job_id=job_id)
    return job_id


def create_submission(project, user, file_name, data, mime_type, *,
                      chapter=None, document_type=Submission.DocumentType.CHAPTER, queue=None):
    """
    儲存上傳檔案並建立新版本的 Submission，接著排程原創性檢測

    重新上傳同一章節會建立新的一筆（version + 1），有自己的 queued 狀態與 dedup key。
    """
    latest = (
        Submission.objects
        .filter(project=project, document_type=document_type, chapter=chapter)
        .order_by('-version')
        .first()
    )
    next_version = latest.version + 1 if latest else 1

    storage_key = storage.upload(
        storage.build_key(project.pk, chapter, next_version, file_name),
        data,
    )

    submission = Submission.objects.create(
        project=project,
        submitted_by=user,
        document_type=document_type,
        chapter=chapter,
        version=next_version,
        file_name=file_name,
        file_type=mime_type,
        file_size=len(data),
        storage_key=storage_key,
        plagiarism_status=Submission.PlagiarismStatus.QUEUED,
    )
    logger.info(f"[Submission] Created {submission.pk} (v{next_version}) for project {project.pk}")

    schedule_originality_check(submission, queue=queue)
    return submission
