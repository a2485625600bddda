"""
背景執行

fire-and-forget 的工作（例如通知、無 broker 時的檢測 fallback）
放到 daemon thread 執行，例外只會記錄在 log，不會影響呼叫端。
"""

import logging
import threading

from django.db import close_old_connections

logger = logging.getLogger(__name__)


def _guarded(func, name, args, kwargs):
    try:
        func(*args, **kwargs)
    except Exception as e:
        logger.error(f"[Background] {name} failed: {e}", exc_info=True)
    finally:
        # 執行緒自己開的 DB 連線不會被 request 週期回收
        close_old_connections()


def run_in_background(func, *args, name=None, **kwargs):
    """
    在 daemon thread 執行 func(*args, **kwargs)

    Returns:
        threading.Thread: 已啟動的執行緒（測試時可以 join）
    """
    name = name or getattr(func, '__name__', 'task')
    thread = threading.Thread(
        target=_guarded,
        args=(func, name, args, kwargs),
        name=f"bg-{name}",
        daemon=True,
    )
    thread.start()
    return thread
