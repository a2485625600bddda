"""
原創性檢測設定

所有設定都可以在 Django settings 用 ORIGINALITY_<NAME> 覆寫，
每次呼叫時才讀取，方便測試使用 override_settings。
"""

from django.conf import settings

DEFAULTS = {
    'QUEUE_NAME': 'plagiarism-check',
    'MAX_ATTEMPTS': 3,
    'BACKOFF_SECONDS': 5,
    'RETAIN_COMPLETED': 200,
    'RETAIN_FAILED': 500,
    'WORKER_CONCURRENCY': 2,
    'RATE_LIMIT': '10/m',
    'DEDUP_TTL': 60 * 60 * 24,
    'BROKER_TIMEOUT': 5,
    'BROKER_RECHECK_SECONDS': 30,
    'MIN_TEXT_LENGTH': 50,
    'CORPUS_LIMIT': 100,
    'TASK_SOFT_TIME_LIMIT': 300,
    'PROVIDER': '',
}


def get(name):
    return getattr(settings, f'ORIGINALITY_{name}', DEFAULTS[name])


def backoff_delay(retries):
    """第 n 次重試前的等待秒數：5s → 10s → 20s"""
    return get('BACKOFF_SECONDS') * (2 ** retries)
