"""
通知服務

notify() 只負責寫入一筆 Notification；呼叫端若不想讓通知失敗影響主流程，
應該把它丟到背景執行（見 originality.background）。
"""

import logging

from .models import Notification

logger = logging.getLogger(__name__)


def notify(user_id, type, payload=None):
    """
    建立一筆站內通知

    Args:
        user_id: 收件者的 User ID
        type: Notification.Type 之一
        payload: dict，可包含 title、message、metadata

    Returns:
        Notification: 新建立的通知
    """
    payload = payload or {}
    notification = Notification.objects.create(
        user_id=user_id,
        type=type,
        title=payload.get('title') or Notification.Type(type).label,
        message=payload.get('message', ''),
        metadata=payload.get('metadata', {}),
    )
    logger.info(f"[Notification] {type} -> user {user_id}")
    return notification
