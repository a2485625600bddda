"""
原創性檢測佇列 (Queue Manager)

- 只在 broker 可連線時建立具名佇列 (plagiarism-check)，且只建立一次
- 以 dedup key (plag-<submission_id>) 去重：同一份 submission 同時間只會有一個工作
- broker 不可用時 enqueue() 回傳 None，呼叫端改走 fallback，而不是拋出例外
"""

import logging
import threading
import time

from celery import current_app
from django.apps import apps
from django.core.cache import cache
from kombu.exceptions import OperationalError

from . import conf
from .tasks import run_originality_check

logger = logging.getLogger(__name__)


class OriginalityQueue:

    def __init__(self, app=None, queue_name=None):
        self.app = app or current_app
        self.queue_name = queue_name or conf.get('QUEUE_NAME')
        self._queue = None
        self._available = False
        self._started = False
        self._last_check = None
        self._lock = threading.Lock()

    @property
    def available(self) -> bool:
        return self._available

    @property
    def started(self) -> bool:
        return self._started

    def _check_broker(self) -> bool:
        try:
            with self.app.connection_for_write() as conn:
                conn.ensure_connection(max_retries=1, timeout=conf.get('BROKER_TIMEOUT'))
            return True
        except (OperationalError, OSError) as e:
            logger.warning(f"[Originality Queue] Broker connection failed: {e}")
            return False

    def _recheck_due(self) -> bool:
        if self._last_check is None:
            return True
        return time.monotonic() - self._last_check >= conf.get('BROKER_RECHECK_SECONDS')

    def start(self) -> bool:
        """
        確認 broker 是否可用，可用時建立佇列

        Returns:
            bool: broker 是否可用
        """
        with self._lock:
            self._started = True
            self._last_check = time.monotonic()
            self._available = self._check_broker()

            if not self._available:
                logger.warning('[Originality Queue] Broker not available, checks will use fallback mode.')
                return False

            if self._queue is None:
                self._queue = self.app.amqp.queues.select_add(self.queue_name)
                logger.info(f"[Originality Queue] Queue '{self.queue_name}' ready")
            return True

    def stop(self):
        with self._lock:
            self._queue = None
            self._available = False
            self._started = False
        logger.info('[Originality Queue] Stopped.')

    def _claim(self, key) -> bool:
        """
        以 cache.add (Redis SET NX) 佔用 dedup key

        Returns:
            True: 成功佔用
            False: 已有相同 submission 的工作
        """
        return cache.add(key, key, timeout=conf.get('DEDUP_TTL'))

    def enqueue(self, job):
        """
        排入一個原創性檢測工作

        Args:
            job: CheckJob

        Returns:
            str: job id（重複排入時回傳既有工作的 id）
            None: broker 不可用
        """
        if not self._started or (not self._available and self._recheck_due()):
            self.start()

        if not self._available:
            return None

        key = job.dedup_key

        try:
            claimed = self._claim(key)
        except Exception as e:
            # dedup 存在 Redis，Redis 掛掉時視同 broker 不可用
            logger.error(f"[Originality Queue] Dedup claim failed for {key}: {e}")
            self._available = False
            return None

        if not claimed:
            logger.info(f"[Originality Queue] Job {key} already scheduled, collapsing duplicate enqueue")
            return key

        try:
            result = run_originality_check.apply_async(
                args=(job.to_message(),),
                task_id=key,
                queue=self.queue_name,
            )
        except (OperationalError, OSError) as e:
            logger.error(f"[Originality Queue] Publish failed for {key}: {e}")
            cache.delete(key)
            self._available = False
            return None

        logger.info(f"[Originality Queue] Enqueued {key}")
        return result.id


def get_queue() -> OriginalityQueue:
    """app 啟動時建立的 OriginalityQueue"""
    return apps.get_app_config('originality').queue
