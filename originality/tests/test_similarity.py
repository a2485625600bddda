# originality/tests/test_similarity.py
"""
測試文字相似度引擎（純函式，不需要資料庫）
"""
import random
import re
import unittest
from unittest.mock import MagicMock

from hypothesis import given, strategies as st, settings

from originality.similarity import (
    CorpusDocument,
    Strategy,
    build_shingles,
    check_originality,
    compare_against_corpus,
    generate_mock_result,
    jaccard_similarity,
    select_strategy,
    tokenize,
)

ESSAY = (
    "The capstone system stores every chapter submitted by the project team and "
    "compares the extracted text with documents written by other groups to find "
    "overlapping passages before the adviser reviews the chapter."
)

UNRELATED = (
    "Volcanic basalt formations cooled quickly along northern glaciers while "
    "migrating herons circled wetlands during autumn evenings near quiet harbors."
)


def _doc(i, text, title='Other Project', chapter=1):
    return CorpusDocument(id=f'doc-{i}', title=title, chapter=chapter, text=text)


class TokenizeTests(unittest.TestCase):

    def test_tokenize_sentence(self):
        self.assertEqual(
            tokenize("Hello, World! This is a Test."),
            ['hello', 'world', 'this', 'test'],
        )

    def test_tokenize_empty(self):
        self.assertEqual(tokenize(''), [])
        self.assertEqual(tokenize(None), [])

    def test_tokenize_drops_short_tokens(self):
        self.assertEqual(tokenize("a an the of it"), ['the'])

    def test_tokenize_keeps_ascii_word_characters_only(self):
        """重音字母與 CJK 字元視為分隔符號"""
        self.assertEqual(tokenize("Café résumé naïve"), ['caf', 'sum'])
        self.assertEqual(tokenize("我們的畢業專題系統"), [])
        self.assertEqual(tokenize("snake_case v2_final"), ['snake_case', 'v2_final'])


class ShingleTests(unittest.TestCase):

    def test_build_shingles(self):
        shingles = build_shingles(['one', 'two', 'three', 'four'])
        self.assertEqual(shingles, {'one two three', 'two three four'})

    def test_build_shingles_too_few_tokens(self):
        self.assertEqual(build_shingles(['one', 'two']), set())

    def test_build_shingles_invalid_size(self):
        with self.assertRaises(ValueError):
            build_shingles(['one'], n=0)


class JaccardTests(unittest.TestCase):

    def test_both_empty(self):
        self.assertEqual(jaccard_similarity(set(), set()), 1.0)

    def test_one_empty(self):
        self.assertEqual(jaccard_similarity({'a b c'}, set()), 0.0)
        self.assertEqual(jaccard_similarity(set(), {'a b c'}), 0.0)

    def test_partial_overlap(self):
        self.assertAlmostEqual(jaccard_similarity({'a', 'b'}, {'b', 'c'}), 1 / 3)


class CompareAgainstCorpusTests(unittest.TestCase):

    def test_empty_corpus(self):
        self.assertEqual(
            compare_against_corpus(ESSAY, []),
            {'originality_score': 100, 'matched_sources': []},
        )

    def test_identical_document(self):
        """與語料其中一篇完全相同 → 100% 相符，分數 < 20"""
        corpus = [_doc(1, ESSAY, title='Smart Campus', chapter=2), _doc(2, UNRELATED)]
        result = compare_against_corpus(ESSAY, corpus)

        self.assertLess(result['originality_score'], 20)
        top = result['matched_sources'][0]
        self.assertEqual(top['source_id'], 'doc-1')
        self.assertEqual(top['title'], 'Smart Campus')
        self.assertEqual(top['chapter'], 2)
        self.assertEqual(top['match_percentage'], 100)

    def test_disjoint_vocabulary(self):
        result = compare_against_corpus(ESSAY, [_doc(1, UNRELATED)])
        self.assertGreater(result['originality_score'], 80)
        self.assertEqual(result['matched_sources'], [])

    def test_matches_capped_at_ten(self):
        """15 篇高度相似的文件 → 最多回傳 10 筆"""
        corpus = [_doc(i, ESSAY + f" Appendix number {i} lists references.") for i in range(15)]
        result = compare_against_corpus(ESSAY, corpus)

        self.assertEqual(len(result['matched_sources']), 10)
        percentages = [m['match_percentage'] for m in result['matched_sources']]
        self.assertEqual(percentages, sorted(percentages, reverse=True))

    def test_blank_corpus_documents_skipped(self):
        result = compare_against_corpus(ESSAY, [_doc(1, '   '), _doc(2, '')])
        self.assertEqual(result, {'originality_score': 100, 'matched_sources': []})

    def test_missing_title_and_chapter_defaults(self):
        corpus = [CorpusDocument(id='x', title='', chapter=None, text=ESSAY)]
        match = compare_against_corpus(ESSAY, corpus)['matched_sources'][0]
        self.assertEqual(match['title'], 'Unknown Project')
        self.assertEqual(match['chapter'], 0)


class StrategyTests(unittest.TestCase):

    def test_mock_result_range(self):
        for seed in range(20):
            result = generate_mock_result(random.Random(seed))
            self.assertTrue(70 <= result['originality_score'] <= 100)
            self.assertEqual(result['matched_sources'], [])

    def test_select_strategy(self):
        available = MagicMock()
        available.is_available.return_value = True
        unavailable = MagicMock()
        unavailable.is_available.return_value = False
        corpus = [_doc(1, ESSAY)]

        self.assertIs(select_strategy(corpus, available), Strategy.PROVIDER)
        self.assertIs(select_strategy(corpus, unavailable), Strategy.INTERNAL_CORPUS)
        self.assertIs(select_strategy([], None), Strategy.MOCK)

    def test_check_originality_uses_provider(self):
        provider = MagicMock()
        provider.is_available.return_value = True
        provider.check.return_value = {'originality_score': 42, 'matched_sources': []}

        result = check_originality(ESSAY, [_doc(1, ESSAY)], provider=provider)

        self.assertEqual(result['originality_score'], 42)
        provider.check.assert_called_once()

    def test_check_originality_internal_corpus(self):
        result = check_originality(ESSAY, [_doc(1, ESSAY)])
        self.assertEqual(result['matched_sources'][0]['match_percentage'], 100)

    def test_check_originality_mock_without_corpus(self):
        result = check_originality(ESSAY, [])
        self.assertTrue(70 <= result['originality_score'] <= 100)


# ===================================================================
# Property-based tests
# ===================================================================
latin_text = st.text(alphabet=st.characters(max_codepoint=0x24F), max_size=300)
words = st.lists(st.text(alphabet='abcdefghij', min_size=3, max_size=6), max_size=40)


class SimilarityPropertyTests(unittest.TestCase):

    @given(text=latin_text)
    @settings(max_examples=100)
    def test_tokens_are_lowercase_words(self, text):
        for token in tokenize(text):
            self.assertGreaterEqual(len(token), 3)
            self.assertEqual(token, token.lower())
            self.assertIsNotNone(re.fullmatch(r'[a-z0-9_]+', token))

    @given(tokens=words, n=st.integers(min_value=1, max_value=5))
    def test_shingle_count_bound(self, tokens, n):
        self.assertLessEqual(len(build_shingles(tokens, n)), max(0, len(tokens) - n + 1))

    @given(shingles=st.sets(st.text(min_size=1, max_size=10), min_size=1, max_size=20))
    def test_jaccard_self_similarity(self, shingles):
        self.assertEqual(jaccard_similarity(shingles, shingles), 1.0)
        self.assertEqual(jaccard_similarity(shingles, set()), 0.0)

    @given(text=latin_text)
    def test_empty_corpus_always_original(self, text):
        self.assertEqual(
            compare_against_corpus(text, []),
            {'originality_score': 100, 'matched_sources': []},
        )

    @given(
        text=words.map(' '.join),
        corpus_texts=st.lists(words.map(' '.join), max_size=15),
    )
    @settings(max_examples=50)
    def test_score_bounds_and_match_order(self, text, corpus_texts):
        corpus = [_doc(i, t) for i, t in enumerate(corpus_texts)]
        result = compare_against_corpus(text, corpus)

        score = result['originality_score']
        self.assertIsInstance(score, int)
        self.assertTrue(0 <= score <= 100)

        matches = result['matched_sources']
        self.assertLessEqual(len(matches), 10)
        percentages = [m['match_percentage'] for m in matches]
        self.assertEqual(percentages, sorted(percentages, reverse=True))
        self.assertTrue(all(p > 5 for p in percentages))
