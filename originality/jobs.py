"""
原創性檢測工作 (Check Job) 的訊息格式
"""

from dataclasses import asdict, dataclass
from typing import Optional

DEDUP_PREFIX = 'plag-'
SYNC_PREFIX = 'sync-'


def dedup_key(submission_id) -> str:
    """同一份 submission 只會對應到同一個 job id"""
    return f"{DEDUP_PREFIX}{submission_id}"


@dataclass(frozen=True)
class CheckJob:
    submission_id: str
    storage_key: str
    file_type: str
    project_id: str
    chapter: Optional[int] = None
    document_type: Optional[str] = None

    @property
    def dedup_key(self) -> str:
        return dedup_key(self.submission_id)

    @property
    def sync_job_id(self) -> str:
        return f"{SYNC_PREFIX}{self.submission_id}"

    @property
    def label(self) -> str:
        if self.chapter:
            return f"Chapter {self.chapter}"
        if self.document_type:
            return self.document_type.replace('_', ' ').title()
        return 'Document'

    def to_message(self) -> dict:
        return asdict(self)

    @classmethod
    def from_message(cls, message: dict) -> 'CheckJob':
        return cls(
            submission_id=str(message['submission_id']),
            storage_key=message['storage_key'],
            file_type=message['file_type'],
            project_id=str(message['project_id']),
            chapter=message.get('chapter'),
            document_type=message.get('document_type'),
        )

    @classmethod
    def for_submission(cls, submission) -> 'CheckJob':
        return cls(
            submission_id=str(submission.pk),
            storage_key=submission.storage_key,
            file_type=submission.file_type,
            project_id=str(submission.project_id),
            chapter=submission.chapter,
            document_type=submission.document_type,
        )
