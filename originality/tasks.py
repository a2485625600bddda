"""
原創性檢測 Celery 任務

重試策略：最多 3 次嘗試，指數退避 5s → 10s → 20s。
只有在重試次數用完後才把結果標記為 failed，中間的失敗不會寫入結果。
"""

import logging

from celery import shared_task

from submissions.models import Submission

from . import conf, state
from .exceptions import InvalidTransition
from .jobs import CheckJob
from .models import OriginalityJobRecord
from .pipeline import process_check
from .signals import originality_check_completed, originality_check_failed

logger = logging.getLogger(__name__)


def _handle_exhausted(task, job, job_id, attempts, exc):
    """重試次數用完，寫入終態 failed"""
    error = str(exc)
    try:
        state.mark_failed(job.submission_id, error)
    except Exception as db_error:
        logger.error(f"[Originality Worker] Failed to update submission status: {db_error}")

    OriginalityJobRecord.record(
        job_id=job_id,
        submission_id=job.submission_id,
        state=OriginalityJobRecord.State.FAILED,
        attempts=attempts,
        error_message=error,
    )
    originality_check_failed.send(
        sender=task.__class__,
        submission_id=job.submission_id,
        job_id=job_id,
        error=error,
    )
    return {'status': 'failed', 'reason': error}


@shared_task(
    bind=True,
    name='originality.tasks.run_originality_check',
    max_retries=conf.get('MAX_ATTEMPTS') - 1,
    rate_limit=conf.get('RATE_LIMIT'),
    soft_time_limit=conf.get('TASK_SOFT_TIME_LIMIT') or None,
)
def run_originality_check(self, message):
    """
    執行一次原創性檢測

    Args:
        message: CheckJob.to_message() 產生的 dict

    Returns:
        dict: 執行結果（completed / failed / skipped / error）
    """
    job = CheckJob.from_message(message)
    job_id = self.request.id or job.dedup_key
    attempts = self.request.retries + 1

    if not Submission.objects.filter(pk=job.submission_id).exists():
        logger.error(f"[Originality Worker] Submission not found: {job.submission_id}")
        return {'status': 'error', 'reason': 'submission_not_found'}

    # 結果已是終態（避免重複處理）
    if state.is_terminal(job.submission_id):
        logger.warning(f"[Originality Worker] Submission {job.submission_id} already checked, skipping")
        return {'status': 'skipped', 'reason': 'already_finished'}

    try:
        result = process_check(job, job_id=job_id)

    except InvalidTransition as exc:
        logger.warning(f"[Originality Worker] {exc}, skipping")
        return {'status': 'skipped', 'reason': str(exc)}

    except Exception as exc:
        logger.error(f"[Originality Worker] Attempt {attempts} failed for job {job_id}: {exc}")

        if self.request.retries < self.max_retries:
            countdown = conf.backoff_delay(self.request.retries)
            logger.info(f"[Originality Worker] Retrying job {job_id} in {countdown}s")
            raise self.retry(exc=exc, countdown=countdown)

        return _handle_exhausted(self, job, job_id, attempts, exc)

    OriginalityJobRecord.record(
        job_id=job_id,
        submission_id=job.submission_id,
        state=OriginalityJobRecord.State.COMPLETED,
        attempts=attempts,
        originality_score=result['originality_score'],
    )
    originality_check_completed.send(
        sender=self.__class__,
        submission_id=job.submission_id,
        job_id=job_id,
        originality_score=result['originality_score'],
    )
    return {'status': 'completed', **result}
