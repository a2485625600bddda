"""
Celery 配置文件

這個檔案負責初始化 Celery app 並與 Django 整合
"""

import os
from celery import Celery

# 設定 Django settings 模組
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'capstone.settings')

# 創建 Celery app
app = Celery('capstone')

# 從 Django settings 中讀取配置（所有 CELERY_ 開頭的設定）
app.config_from_object('django.conf:settings', namespace='CELERY')

# request 執行緒與背景執行緒也使用同一個 app（current_app 是 thread-local）
app.set_default()

# 自動發現所有 app 中的 tasks.py
app.autodiscover_tasks()
