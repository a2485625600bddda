"""
原創性檢測事件

worker 完成或最終失敗時送出，預設的 receiver 只負責記錄 log；
需要統計或監控的地方可以另外接上 receiver。
"""

import logging

from django.dispatch import Signal, receiver

logger = logging.getLogger(__name__)

# kwargs: submission_id, job_id, originality_score
originality_check_completed = Signal()

# kwargs: submission_id, job_id, error
originality_check_failed = Signal()


@receiver(originality_check_completed)
def log_check_completed(sender, submission_id, job_id, originality_score, **kwargs):
    logger.info(f"[Originality Worker] Job {job_id} completed, score: {originality_score}%")


@receiver(originality_check_failed)
def log_check_failed(sender, submission_id, job_id, error, **kwargs):
    logger.error(f"[Originality Worker] Job {job_id} FAILED for submission {submission_id}: {error}")
