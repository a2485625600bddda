"""
外部原創性檢測服務的介接點

目前沒有實作任何真正的外部服務；設定 ORIGINALITY_PROVIDER 為 provider 類別的
dotted path 即可替換。任何實作都必須回傳與內部引擎相同的
{'originality_score', 'matched_sources'} 格式。
"""

import logging

from django.conf import settings
from django.utils.module_loading import import_string

from . import conf

logger = logging.getLogger(__name__)


class OriginalityProvider:
    """外部檢測服務的基底類別"""

    name = 'base'

    def is_available(self) -> bool:
        return False

    def check(self, text, corpus):
        raise NotImplementedError


class CopyleaksProvider(OriginalityProvider):
    """
    Copyleaks 介接（尚未實作）

    即使設定了帳號與 API key 也回報不可用，讓呼叫端直接選擇內部引擎。
    """

    name = 'copyleaks'

    def __init__(self, email=None, api_key=None):
        self.email = email if email is not None else getattr(settings, 'COPYLEAKS_EMAIL', '')
        self.api_key = api_key if api_key is not None else getattr(settings, 'COPYLEAKS_API_KEY', '')

    @property
    def is_configured(self) -> bool:
        return bool(self.email and self.api_key)

    def is_available(self) -> bool:
        if self.is_configured:
            logger.warning('[Originality] Copyleaks credentials set but integration is not implemented, using internal engine.')
        return False

    def check(self, text, corpus):
        raise NotImplementedError('Copyleaks integration is not implemented.')


def load_provider():
    """
    依 ORIGINALITY_PROVIDER 建立 provider，未設定時回傳 None
    """
    path = conf.get('PROVIDER')
    if not path:
        return None
    provider_class = import_string(path)
    return provider_class()
