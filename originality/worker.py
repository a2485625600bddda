"""
原創性檢測 Worker Pool

消費 plagiarism-check 佇列：
    - 同時最多 2 個檢測 (concurrency)
    - 每 60 秒最多 10 個 (task rate_limit，Celery 以每個 worker 的 token bucket 計算)
"""

import logging
import threading

from celery import current_app
from celery.utils.nodenames import host_format

from . import conf

logger = logging.getLogger(__name__)


class OriginalityWorkerPool:

    def __init__(self, app=None, queue=None, queue_name=None, concurrency=None,
                 pool='threads', hostname='originality@%h', loglevel='INFO'):
        self.app = app or current_app
        self.queue = queue
        self.queue_name = queue_name or conf.get('QUEUE_NAME')
        self.concurrency = concurrency or conf.get('WORKER_CONCURRENCY')
        self.pool = pool
        self.hostname = hostname
        self.loglevel = loglevel
        self._worker = None
        self._thread = None

    @property
    def running(self) -> bool:
        return self._worker is not None

    def worker_options(self) -> dict:
        return {
            'queues': [self.queue_name],
            'concurrency': self.concurrency,
            'pool_cls': self.pool,
            'hostname': host_format(self.hostname),
            'loglevel': self.loglevel,
        }

    def argv(self, concurrency=None, pool=None, loglevel=None) -> list:
        """命令列參數；覆寫值只影響這次產生的 argv，不會改動 pool 本身"""
        return [
            'worker',
            f'--queues={self.queue_name}',
            f'--concurrency={concurrency or self.concurrency}',
            f'--pool={pool or self.pool}',
            f'--hostname={self.hostname}',
            f'--loglevel={loglevel or self.loglevel}',
        ]

    def start(self) -> bool:
        """
        在背景執行緒啟動 worker

        Returns:
            bool: 是否成功啟動
        """
        if self._worker is not None:
            logger.warning('[Originality Worker] Already running.')
            return False

        if self.queue is not None and not self.queue.start():
            logger.warning('[Originality Worker] Broker not available, worker not started.')
            return False

        if self.pool in ('threads', 'solo') and conf.get('TASK_SOFT_TIME_LIMIT'):
            # 只有 prefork pool 會送出 SoftTimeLimitExceeded
            logger.warning(f"[Originality Worker] soft_time_limit is not enforced by the {self.pool} pool")

        self._worker = self.app.WorkController(**self.worker_options())
        self._thread = threading.Thread(
            target=self._worker.start,
            name='originality-worker',
            daemon=True,
        )
        self._thread.start()
        logger.info('[Originality Worker] Started and listening for jobs.')
        return True

    def stop(self, timeout=10):
        if self._worker is None:
            return
        self._worker.stop()
        if self._thread is not None:
            self._thread.join(timeout)
        self._worker = None
        self._thread = None
        logger.info('[Originality Worker] Stopped.')

    def run(self, **overrides):
        """前景執行 worker（阻塞），給 management command 使用"""
        argv = self.argv(**overrides)
        logger.info(f"[Originality Worker] Running in foreground: {' '.join(argv)}")
        self.app.worker_main(argv)
