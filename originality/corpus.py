"""
比對語料建構

從既有的 Submission 中挑出已存有抽取文字的文件作為比對來源：
    - 排除同一個專題的文件（避免同組自己比對自己）
    - 排除這份 submission 本身
    - 最多 ORIGINALITY_CORPUS_LIMIT 份（預設 100），不保證順序
"""

import logging
from typing import List

from projects.models import Project
from submissions.models import Submission

from . import conf
from .similarity import UNKNOWN_TITLE, CorpusDocument

logger = logging.getLogger(__name__)


def build_corpus(exclude_project_id, exclude_submission_id, limit=None) -> List[CorpusDocument]:
    limit = limit or conf.get('CORPUS_LIMIT')

    candidates = list(
        Submission.objects
        .exclude(project_id=exclude_project_id)
        .exclude(pk=exclude_submission_id)
        .exclude(extracted_text='')
        .exclude(extracted_text__isnull=True)
        .values('id', 'project_id', 'chapter', 'extracted_text')[:limit]
    )

    # 補上專題標題
    project_ids = {c['project_id'] for c in candidates}
    titles = dict(
        Project.objects.filter(pk__in=project_ids).values_list('id', 'title')
    )

    corpus = [
        CorpusDocument(
            id=str(c['id']),
            title=titles.get(c['project_id']) or UNKNOWN_TITLE,
            chapter=c['chapter'] or 0,
            text=c['extracted_text'],
        )
        for c in candidates
    ]
    logger.debug(f"[Originality] Built corpus of {len(corpus)} documents (excluding project {exclude_project_id})")
    return corpus
