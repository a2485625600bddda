"""
原創性檢測流程 (Process Routine)

Celery worker 與無 broker 時的 fallback 都呼叫同一個 process_check()：
    1. 標記 processing
    2. 從儲存空間下載檔案
    3. 抽取純文字
    4. 文字過短 → 直接給 100 分
    5. 儲存抽取文字 → 建立語料 → 比對 → 寫回結果
    6. 通知作者（背景執行，失敗不影響結果）

任何一步失敗都直接拋出例外，由呼叫端決定何時寫入 failed。
"""

import logging

from notifications.models import Notification
from notifications.services import notify
from submissions import storage
from submissions.models import Submission

from . import conf, state
from .background import run_in_background
from .corpus import build_corpus
from .exceptions import InvalidTransition
from .extraction import extract_text
from .providers import load_provider
from .similarity import Strategy, check_originality, select_strategy

logger = logging.getLogger(__name__)


def _short_text_result():
    return {'originality_score': 100, 'matched_sources': []}


def notify_author(job, result):
    """通知作者檢測結果（fire-and-forget）"""
    user_id = (
        Submission.objects
        .filter(pk=job.submission_id)
        .values_list('submitted_by_id', flat=True)
        .first()
    )
    if user_id is None:
        return None

    score = result['originality_score']
    payload = {
        'title': 'Originality Check Complete',
        'message': f"Your {job.label} originality score is {score}%.",
        'metadata': {
            'submission_id': job.submission_id,
            'project_id': job.project_id,
            'chapter': job.chapter,
            'originality_score': score,
        },
    }
    return run_in_background(
        notify, user_id, Notification.Type.PLAGIARISM_COMPLETE, payload,
        name='notify-originality',
    )


def process_check(job, job_id=None):
    """
    對一份 submission 執行完整的原創性檢測

    Args:
        job: CheckJob
        job_id: Celery task id 或 fallback 的 sync-<id>

    Returns:
        dict: {'originality_score': int, 'matched_sources': list}
    """
    submission_id = job.submission_id
    logger.info(f"[Originality] Processing job {job_id} for submission {submission_id}")

    if not state.mark_processing(submission_id, job_id):
        raise InvalidTransition(f"Submission {submission_id} cannot enter processing")

    data = storage.download(job.storage_key)
    text = extract_text(data, job.file_type)

    if len(text.strip()) < conf.get('MIN_TEXT_LENGTH'):
        # 文字太少沒有比對意義，當成原創以免誤判
        Submission.objects.filter(pk=submission_id).update(extracted_text=text or '')
        result = _short_text_result()
        state.mark_completed(submission_id, result['originality_score'], result['matched_sources'])
        logger.info(f"[Originality] Submission {submission_id}: too little text, scored 100%.")
        notify_author(job, result)
        return result

    # 存下抽取文字，之後可作為其他人的比對語料
    Submission.objects.filter(pk=submission_id).update(extracted_text=text)

    corpus = build_corpus(job.project_id, submission_id)
    provider = load_provider()
    if select_strategy(corpus, provider) is Strategy.MOCK:
        logger.warning(f"[Originality] Submission {submission_id}: empty corpus, score is not authoritative")

    result = check_originality(text, corpus, provider=provider)

    state.mark_completed(submission_id, result['originality_score'], result['matched_sources'])
    logger.info(
        f"[Originality] Submission {submission_id}: originality {result['originality_score']}% "
        f"({len(result['matched_sources'])} matches found)."
    )

    notify_author(job, result)
    return result
