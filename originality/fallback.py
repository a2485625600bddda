"""
無 broker 時的同步 fallback

直接執行同一個 process_check()，沒有重試：
任何例外都立即寫成終態 failed，呼叫端不會收到例外。
"""

import logging

from . import state
from .background import run_in_background
from .pipeline import process_check

logger = logging.getLogger(__name__)


def run_sync(job):
    """
    Returns:
        dict | None: 檢測結果，失敗時回傳 None
    """
    try:
        return process_check(job, job_id=job.sync_job_id)
    except Exception as e:
        logger.error(f"[Originality Sync] Failed for {job.submission_id}: {e}")
        try:
            state.mark_failed(job.submission_id, e)
        except Exception as db_error:
            logger.error(f"[Originality Sync] Failed to update submission status: {db_error}")
        return None


def dispatch(job):
    """在背景執行緒執行 run_sync，不阻塞觸發的 request"""
    return run_in_background(run_sync, job, name=f"originality-sync-{job.submission_id}")
