"""
Inverted shingle index over one corpus snapshot.

Built once per snapshot and reused for many queries. Only documents sharing
a shingle with the query are scored; everything else scores 0 and cannot pass
a positive threshold, so results equal a full scan of the same snapshot.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Sequence, Set

from plagcheck.config import DEFAULT_SHINGLE_SIZE, LOCAL_SOURCE_NAME
from plagcheck.schemas.document_schemas import StoredDocument
from plagcheck.schemas.plagiarism_schemas import MatchResult
from plagcheck.utils.corpus_matcher import build_match
from plagcheck.utils.lexical_utils import jaccard_similarity, word_shingles

logger = logging.getLogger("plagcheck.index")


class CorpusIndex:
    def __init__(
        self,
        documents: Sequence[StoredDocument],
        k: int = DEFAULT_SHINGLE_SIZE,
        source: str = LOCAL_SOURCE_NAME,
    ) -> None:
        self.k = k
        self.source = source
        self._documents: List[StoredDocument] = list(documents)
        # corpus position -> shingles, text documents only
        self._shingles: Dict[int, Set[str]] = {}
        self._postings: Dict[str, Set[int]] = defaultdict(set)
        self._empty_positions: Set[int] = set()

        for pos, doc in enumerate(self._documents):
            if not isinstance(doc.content, str):
                continue
            shingles = word_shingles(doc.content, k)
            self._shingles[pos] = shingles
            if not shingles:
                self._empty_positions.add(pos)
            for shingle in shingles:
                self._postings[shingle].add(pos)

        logger.debug(
            f"Indexed {len(self._shingles)} of {len(self._documents)} documents, "
            f"{len(self._postings)} distinct shingles (k={k})"
        )

    def __len__(self) -> int:
        return len(self._documents)

    def candidates(self, query_shingles: Set[str], threshold: float) -> List[int]:
        """Corpus positions that can reach ``threshold``, in corpus order."""
        if threshold <= 0:
            positions = set(self._shingles)
        elif not query_shingles:
            positions = set(self._empty_positions)
        else:
            positions = set()
            for shingle in query_shingles:
                positions |= self._postings.get(shingle, set())
        return sorted(positions)

    def match(self, query_text: str, threshold: float) -> List[MatchResult]:
        query_shingles = word_shingles(query_text, self.k)
        matches: List[MatchResult] = []
        for pos in self.candidates(query_shingles, threshold):
            similarity = jaccard_similarity(query_shingles, self._shingles[pos])
            if similarity >= threshold:
                matches.append(build_match(self._documents[pos], similarity, self.source))
        return matches
