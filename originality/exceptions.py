"""
原創性檢測的錯誤類型

Broker 不可用與文字過短都不是錯誤，不在這裡定義：
前者由 OriginalityQueue.enqueue() 回傳 None 表示，後者直接給 100 分。
"""


class OriginalityError(Exception):
    """原創性檢測流程中的錯誤"""


class DownloadError(OriginalityError):
    """檔案不存在或儲存空間無法存取"""


class ExtractionError(OriginalityError):
    """無法從檔案抽出文字"""


class UnsupportedMimeError(ExtractionError):
    def __init__(self, mime_type):
        self.mime_type = mime_type
        super().__init__(f"Unsupported MIME type for text extraction: {mime_type}")


class EmptyBufferError(ExtractionError):
    def __init__(self):
        super().__init__("Cannot extract text from an empty buffer.")


class InvalidTransition(OriginalityError):
    """submission 不存在或檢測結果已經是終態"""
