"""
capstone 專案套件

載入 Celery app，讓 shared_task（例如原創性檢測任務）在 Django 啟動後就綁定到同一個 app
"""

from .celery import app as celery_app

__all__ = ('celery_app',)
