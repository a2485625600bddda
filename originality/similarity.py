"""
文字相似度引擎

純函式、沒有 I/O：
    tokenize → n-gram shingles → Jaccard 係數 → 分數混合

分數越高代表越原創 (100 = 與語料庫沒有任何重疊)。
這裡只衡量詞彙層級的 n-gram 重疊，不做語意分析。
"""

import enum
import logging
import math
import random
import re
from typing import Iterable, List, NamedTuple, Optional, Sequence, Set

logger = logging.getLogger(__name__)

MIN_TOKEN_LENGTH = 3
SHINGLE_SIZE = 3
MATCH_NOISE_FLOOR = 5        # matchPercentage <= 5 視為雜訊
MAX_MATCHED_SOURCES = 10
MAX_SIMILARITY_WEIGHT = 0.7
AVG_SIMILARITY_WEIGHT = 0.3
MOCK_SCORE_RANGE = (70, 100)
UNKNOWN_TITLE = 'Unknown Project'

# 只保留 ASCII 英數字、底線與空白；重音字母與 CJK 字元都當成分隔符號
_NON_WORD = re.compile(r'[^A-Za-z0-9_\s]')


class CorpusDocument(NamedTuple):
    """比對用的語料文件（只存在於一次檢測期間，不會另外存檔）"""
    id: str
    title: str
    chapter: int
    text: str


class Strategy(enum.Enum):
    PROVIDER = 'provider'
    INTERNAL_CORPUS = 'internal_corpus'
    MOCK = 'mock'


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _empty_result(score: int = 100) -> dict:
    return {'originality_score': score, 'matched_sources': []}


def tokenize(text: str) -> List[str]:
    """
    轉小寫、非 ASCII 英數字元換成空白、依空白切開，並丟掉長度小於 3 的 token

    >>> tokenize("Hello, World! This is a Test.")
    ['hello', 'world', 'this', 'test']
    >>> tokenize("Café résumé naïve")
    ['caf', 'sum']
    """
    if not text:
        return []
    normalized = _NON_WORD.sub(' ', text.lower())
    return [token for token in normalized.split() if len(token) >= MIN_TOKEN_LENGTH]


def build_shingles(tokens: Sequence[str], n: int = SHINGLE_SIZE) -> Set[str]:
    """
    連續 n 個 token 組成一個 shingle（以單一空白連接），回傳集合

    token 數少於 n 時回傳空集合。
    """
    if n < 1:
        raise ValueError(f"Shingle size must be positive, got {n}")
    return {' '.join(tokens[i:i + n]) for i in range(len(tokens) - n + 1)}


def jaccard_similarity(set_a: Set[str], set_b: Set[str]) -> float:
    """
    |A ∩ B| / |A ∪ B|

    兩個都是空集合回傳 1.0，只有一個是空集合回傳 0.0。
    """
    if not set_a and not set_b:
        return 1.0
    if not set_a or not set_b:
        return 0.0
    intersection = len(set_a & set_b)
    union = len(set_a) + len(set_b) - intersection
    return intersection / union


def compare_against_corpus(text: str, corpus: Optional[Iterable[CorpusDocument]]) -> dict:
    """
    將送審文字與語料庫逐篇比對

    Args:
        text: 送審文件抽出的純文字
        corpus: CorpusDocument 列表

    Returns:
        dict: {'originality_score': int, 'matched_sources': list}
              matched_sources 依 match_percentage 由高到低排序，最多 10 筆
    """
    corpus = list(corpus or [])
    if not corpus:
        # 沒有可比對的文件，視為完全原創（已知限制，並非保證）
        return _empty_result()

    submitted_shingles = build_shingles(tokenize(text))

    matched_sources = []
    max_similarity = 0.0

    for doc in corpus:
        if not doc.text or not doc.text.strip():
            continue

        similarity = jaccard_similarity(submitted_shingles, build_shingles(tokenize(doc.text)))
        match_percentage = _round_half_up(similarity * 100)

        if match_percentage > MATCH_NOISE_FLOOR:
            matched_sources.append({
                'source_id': str(doc.id),
                'title': doc.title or UNKNOWN_TITLE,
                'chapter': doc.chapter or 0,
                'match_percentage': match_percentage,
            })

        if similarity > max_similarity:
            max_similarity = similarity

    matched_sources.sort(key=lambda source: source['match_percentage'], reverse=True)

    if matched_sources:
        avg_similarity = (
            sum(source['match_percentage'] for source in matched_sources)
            / len(matched_sources) / 100
        )
    else:
        avg_similarity = 0.0

    blended = MAX_SIMILARITY_WEIGHT * max_similarity + AVG_SIMILARITY_WEIGHT * avg_similarity
    originality_score = max(0, min(100, _round_half_up((1 - blended) * 100)))

    return {
        'originality_score': originality_score,
        'matched_sources': matched_sources[:MAX_MATCHED_SOURCES],
    }


def generate_mock_result(rng: Optional[random.Random] = None) -> dict:
    """
    產生 70~100 之間的隨機分數（沒有語料也沒有外部服務時使用）

    結果不具參考價值，只用來讓流程不被卡住。
    """
    rng = rng or random
    return _empty_result(rng.randint(*MOCK_SCORE_RANGE))


def select_strategy(corpus, provider=None) -> Strategy:
    """依序選擇：外部服務 → 內部語料比對 → mock"""
    if provider is not None and provider.is_available():
        return Strategy.PROVIDER
    if corpus:
        return Strategy.INTERNAL_CORPUS
    return Strategy.MOCK


def check_originality(text: str, corpus=None, provider=None) -> dict:
    """
    執行原創性檢測

    每次呼叫只選一次策略，不以例外來決定是否退回內部引擎。
    """
    corpus = list(corpus or [])
    strategy = select_strategy(corpus, provider)

    if strategy is Strategy.PROVIDER:
        return provider.check(text, corpus)

    if strategy is Strategy.INTERNAL_CORPUS:
        return compare_against_corpus(text, corpus)

    logger.warning('[Originality] No corpus and no provider configured, returning mock score.')
    return generate_mock_result()
