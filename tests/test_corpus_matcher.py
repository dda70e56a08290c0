import pytest

from plagcheck.schemas.document_schemas import StoredDocument
from plagcheck.utils.corpus_matcher import excerpt, find_corpus_matches

FOX = "the quick brown fox jumps over the lazy dog"


def _docs(*contents):
    return [StoredDocument(id=str(i), content=c) for i, c in enumerate(contents, start=1)]


class TestEndToEnd:

    def test_identical_document_matches_with_full_score(self):
        matches = find_corpus_matches(FOX, _docs(FOX), k=3, threshold=0.7)

        assert len(matches) == 1
        assert matches[0].document_id == "1"
        assert matches[0].similarity == 1.0
        assert matches[0].source == "Local Database"

    def test_unrelated_document_does_not_match(self):
        matches = find_corpus_matches(FOX, _docs("completely unrelated text about cooking"), k=3, threshold=0.7)
        assert matches == []

    def test_empty_query_against_non_empty_document(self):
        assert find_corpus_matches("", _docs(FOX), k=3, threshold=0.7) == []

    def test_empty_query_against_empty_document(self):
        matches = find_corpus_matches("", _docs(""), k=3, threshold=0.7)

        assert len(matches) == 1
        assert matches[0].similarity == 1.0
        assert matches[0].matched_content == "..."

    def test_case_and_punctuation_do_not_matter(self):
        matches = find_corpus_matches("The QUICK brown fox, jumps over the lazy dog!", _docs(FOX))
        assert [m.similarity for m in matches] == [1.0]


class TestThreshold:

    def test_equal_to_threshold_is_included(self):
        # {a,b,c} vs {a,b,c,d} -> 3/4
        matches = find_corpus_matches("a b c", _docs("a b c d"), k=1, threshold=0.75)
        assert [m.similarity for m in matches] == [0.75]

    def test_just_below_threshold_is_excluded(self):
        assert find_corpus_matches("a b c", _docs("a b c d"), k=1, threshold=0.7501) == []

    def test_zero_threshold_accepts_every_text_document(self):
        matches = find_corpus_matches(FOX, _docs("nothing in common", "", FOX), threshold=0.0)
        assert [m.document_id for m in matches] == ["1", "2", "3"]
        assert [m.similarity for m in matches] == [0.0, 0.0, 1.0]


class TestResultShape:

    def test_similarity_rounded_to_four_places(self):
        # {a,b} vs {a,c} -> 1/3 ; {a,b} vs {a,b,c} -> 2/3
        matches = find_corpus_matches("a b", _docs("a c", "a b c"), k=1, threshold=0.0)
        assert [m.similarity for m in matches] == [0.3333, 0.6667]

    def test_exact_tie_rounds_half_to_even(self):
        # {a} vs {a, b0..b30} -> 1/32 = 0.03125, exactly halfway
        stored = "a " + " ".join(f"b{i}" for i in range(31))
        matches = find_corpus_matches("a", _docs(stored), k=1, threshold=0.0)
        assert [m.similarity for m in matches] == [0.0312]

    def test_tie_that_rounds_up(self):
        # {a,b,c} vs 32 words -> 3/32 = 0.09375, halfway to the even 0.0938
        stored = "a b c " + " ".join(f"d{i}" for i in range(29))
        matches = find_corpus_matches("a b c", _docs(stored), k=1, threshold=0.0)
        assert [m.similarity for m in matches] == [0.0938]

    def test_excerpt_keeps_original_text_and_is_truncated(self):
        long_text = "Alpha, Beta! " * 40
        matches = find_corpus_matches(long_text, _docs(long_text), k=2, threshold=0.5)

        assert matches[0].matched_content == long_text[:200] + "..."
        assert len(matches[0].matched_content) == 203

    def test_short_content_still_gets_ellipsis(self):
        assert excerpt("Short text.") == "Short text...."

    def test_results_keep_corpus_order(self):
        docs = _docs("a b c d", "a b c", "a b c d e")
        matches = find_corpus_matches("a b c", docs, k=1, threshold=0.5)

        assert [m.document_id for m in matches] == ["1", "2", "3"]
        assert [m.similarity for m in matches] == [0.75, 1.0, 0.6]


class TestNonTextContent:

    @pytest.mark.parametrize("content", [None, 42, 3.5, {"text": FOX}, [FOX], True])
    def test_non_string_content_is_skipped(self, content):
        docs = [StoredDocument(id="bad", content=content)] + _docs(FOX)
        matches = find_corpus_matches(FOX, docs, threshold=0.0)

        assert [m.document_id for m in matches] == ["1"]

    def test_missing_content_in_mongo_record(self):
        docs = [StoredDocument.from_mongo({"_id": "x1"}), StoredDocument.from_mongo({"_id": "x2", "content": FOX})]
        matches = find_corpus_matches(FOX, docs)

        assert [m.document_id for m in matches] == ["x2"]

    def test_empty_corpus(self):
        assert find_corpus_matches(FOX, []) == []
