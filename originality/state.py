"""
檢測結果狀態機

    queued → processing → {completed | failed}

每個轉換都是一次帶條件的 UPDATE（WHERE plagiarism_status IN 合法來源），
因此終態 (completed / failed) 不會被任何後續寫入改回去。
processing → processing 允許，重試時會再次進入 processing。
queued → failed 也允許：同步退回路徑在 worker 還沒把狀態改成 processing
之前就可能失敗，此時直接寫入終態 failed。
"""

import logging

from django.utils import timezone

from submissions.models import Submission

logger = logging.getLogger(__name__)

Status = Submission.PlagiarismStatus

TERMINAL_STATES = frozenset({Status.COMPLETED, Status.FAILED})

ALLOWED_SOURCES = {
    Status.PROCESSING: (Status.QUEUED, Status.PROCESSING),
    Status.COMPLETED: (Status.PROCESSING,),
    Status.FAILED: (Status.QUEUED, Status.PROCESSING),
}


def _transition(submission_id, target, **fields) -> bool:
    updated = Submission.objects.filter(
        pk=submission_id,
        plagiarism_status__in=ALLOWED_SOURCES[target],
    ).update(plagiarism_status=target, **fields)

    if not updated:
        logger.warning(f"[Originality] Rejected transition to {target} for submission {submission_id}")
    return bool(updated)


def mark_processing(submission_id, job_id=None) -> bool:
    fields = {}
    if job_id:
        fields['plagiarism_job_id'] = job_id
    return _transition(submission_id, Status.PROCESSING, **fields)


def mark_completed(submission_id, originality_score, matched_sources) -> bool:
    return _transition(
        submission_id,
        Status.COMPLETED,
        originality_score=originality_score,
        plagiarism_score=originality_score,
        plagiarism_matches=list(matched_sources),
        plagiarism_processed_at=timezone.now(),
    )


def mark_failed(submission_id, error) -> bool:
    """失敗只記錄錯誤訊息，分數與比對來源保持未設定"""
    return _transition(submission_id, Status.FAILED, plagiarism_error=str(error))


def is_terminal(submission_id) -> bool:
    return Submission.objects.filter(
        pk=submission_id,
        plagiarism_status__in=TERMINAL_STATES,
    ).exists()


def get_status(submission_id):
    """
    讀取檢測狀態

    Returns:
        dict | None: {'status', 'score', 'matches', ...}，找不到 submission 時回傳 None
    """
    submission = (
        Submission.objects
        .filter(pk=submission_id)
        .only(
            'id', 'plagiarism_status', 'plagiarism_score', 'plagiarism_matches',
            'plagiarism_processed_at', 'plagiarism_error',
        )
        .first()
    )
    if submission is None:
        return None

    return {
        'submission_id': str(submission.pk),
        'status': submission.plagiarism_status,
        'score': submission.plagiarism_score,
        'matches': submission.plagiarism_matches or [],
        'processed_at': submission.plagiarism_processed_at,
        'error': submission.plagiarism_error,
    }
