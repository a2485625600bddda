# conftest.py - pytest 和 Hypothesis 全域設定
import os

import pytest
from hypothesis import settings as hypothesis_settings, Verbosity

from capstone.celery import app as celery_app

LOCMEM_CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

# Celery 測試設定：in-memory broker，任務在呼叫端同步 (eager) 執行
CELERY_TEST_CONFIG = {
    'broker_url': 'memory://',
    'result_backend': 'cache+memory://',
    'task_always_eager': True,
    'task_eager_propagates': False,
}

# Hypothesis 設定
hypothesis_settings.register_profile("ci", max_examples=1000)
hypothesis_settings.register_profile("dev", max_examples=100)
hypothesis_settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)

# 根據環境變數選擇設定檔
profile_name = os.getenv("HYPOTHESIS_PROFILE", "dev")
hypothesis_settings.load_profile(profile_name)


@pytest.fixture
def api_client():
    """提供 Django REST framework 測試客戶端"""
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture(autouse=True)
def override_settings(settings):
    """強制測試使用本地記憶體 Cache 與 in-memory Celery，避免依賴 Redis"""
    settings.CACHES = LOCMEM_CACHES
    settings.CELERY_BROKER_URL = CELERY_TEST_CONFIG['broker_url']
    settings.CELERY_RESULT_BACKEND = CELERY_TEST_CONFIG['result_backend']
    settings.CELERY_TASK_ALWAYS_EAGER = True

    # Celery 只在第一次讀取 app.conf 時載入 Django settings，
    # 之後要直接寫入已載入的設定才會生效
    previous = {key: celery_app.conf[key] for key in CELERY_TEST_CONFIG}
    for key, value in CELERY_TEST_CONFIG.items():
        celery_app.conf[key] = value
    yield
    for key, value in previous.items():
        celery_app.conf[key] = value
