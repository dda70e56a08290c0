import logging
from typing import List, Sequence, Set

from plagcheck.config import (
    DEFAULT_MIN_SIMILARITY,
    DEFAULT_SHINGLE_SIZE,
    LOCAL_SOURCE_NAME,
    MATCH_EXCERPT_LENGTH,
    SIMILARITY_DECIMALS,
)
from plagcheck.schemas.document_schemas import StoredDocument
from plagcheck.schemas.plagiarism_schemas import MatchResult
from plagcheck.utils.lexical_utils import jaccard_similarity, word_shingles

logger = logging.getLogger("plagcheck.matcher")


def excerpt(content: str, length: int = MATCH_EXCERPT_LENGTH) -> str:
    return content[:length] + "..."


def build_match(
    document: StoredDocument,
    similarity: float,
    source: str = LOCAL_SOURCE_NAME,
) -> MatchResult:
    # round() is half-to-even on the binary float value
    return MatchResult(
        source=source,
        document_id=document.id,
        similarity=round(similarity, SIMILARITY_DECIMALS),
        matched_content=excerpt(document.content),
    )


def score_document(query_shingles: Set[str], document: StoredDocument, k: int) -> float:
    return jaccard_similarity(query_shingles, word_shingles(document.content, k))


def find_corpus_matches(
    query_text: str,
    documents: Sequence[StoredDocument],
    k: int = DEFAULT_SHINGLE_SIZE,
    threshold: float = DEFAULT_MIN_SIMILARITY,
    source: str = LOCAL_SOURCE_NAME,
) -> List[MatchResult]:
    """
    Compare the query against every stored document (full scan, no index):
      - documents whose content is not text are skipped
      - a document matches when its Jaccard score is >= threshold
      - matches come back in corpus order
    """
    query_shingles = word_shingles(query_text, k)
    matches: List[MatchResult] = []
    skipped = 0

    for doc in documents:
        if not isinstance(doc.content, str):
            skipped += 1
            continue
        similarity = score_document(query_shingles, doc, k)
        if similarity >= threshold:
            matches.append(build_match(doc, similarity, source))

    logger.debug(
        f"Scanned {len(documents)} documents (skipped {skipped} without text), "
        f"{len(matches)} at or above {threshold}"
    )
    return matches
