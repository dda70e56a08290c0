import asyncio
import logging
from typing import List, Optional, Sequence

from plagcheck.dependencies.document_store import MongoDocumentStore
from plagcheck.errors import PlagcheckError, RemoteError
from plagcheck.schemas.document_schemas import AddDocumentResult
from plagcheck.schemas.plagiarism_schemas import (
    CheckOptions,
    CheckReport,
    LocalCheckResult,
    RemoteCheckResult,
    StrategyError,
)
from plagcheck.utils.corpus_matcher import find_corpus_matches
from plagcheck.utils.remote_detector import RapidApiDetector
from plagcheck.utils.shingle_index import CorpusIndex

logger = logging.getLogger("plagcheck.checker")


def _local_error(e: Exception) -> LocalCheckResult:
    logger.error(f"Local database check failed: {e}")
    return LocalCheckResult(error=StrategyError(error=f"Failed to check local database: {e}"))


def _remote_error(e: Exception) -> RemoteCheckResult:
    logger.error(f"RapidAPI check failed: {e}")
    if isinstance(e, RemoteError):
        err = StrategyError(
            error=f"Failed to check RapidAPI: {e.message}",
            status_code=e.status_code,
            response_data=e.response_data,
        )
    else:
        err = StrategyError(error=f"Failed to check RapidAPI: {e}")
    return RemoteCheckResult(error=err)


async def _read_corpus(store):
    if store is None:
        store = MongoDocumentStore()
    return await store.list_all()


async def run_local_check(text: str, options: CheckOptions, store=None) -> LocalCheckResult:
    try:
        documents = await _read_corpus(store)
    except PlagcheckError as e:
        return _local_error(e)

    matches = find_corpus_matches(
        text,
        documents,
        k=options.shingle_size,
        threshold=options.min_similarity_score,
    )
    logger.info(f"Local plagiarism check completed. Matches: {len(matches)}")
    return LocalCheckResult(matches=matches)


async def run_remote_check(text: str, options: CheckOptions, detector=None) -> RemoteCheckResult:
    try:
        if detector is None:
            detector = RapidApiDetector()
        # requests is blocking; keep the event loop free for the local check
        data = await asyncio.to_thread(
            detector.check,
            text,
            include_citations=options.include_citations,
            scrape_sources=options.scrape_sources,
        )
    except PlagcheckError as e:
        return _remote_error(e)

    result = RemoteCheckResult(result=data)
    logger.info(f"RapidAPI check completed. Plagiarism: {result.plagiarism_percentage}%")
    return result


def _is_detected(local: Optional[LocalCheckResult], remote: Optional[RemoteCheckResult]) -> bool:
    return bool((local and local.found) or (remote and remote.found))


async def _not_requested() -> None:
    return None


async def check_plagiarism(
    text: str,
    options: Optional[CheckOptions] = None,
    store=None,
    detector=None,
) -> CheckReport:
    """
    Run the enabled strategies side by side and merge them into one report.

    Each strategy reports its own failure in its slot; the other one is
    unaffected. ``plagiarism_detected`` is true when any strategy that
    succeeded found a match (local) or a positive percentage (remote).
    """
    options = options or CheckOptions()

    local, remote = await asyncio.gather(
        run_local_check(text, options, store) if options.check_local_database else _not_requested(),
        run_remote_check(text, options, detector) if options.check_remote else _not_requested(),
    )

    return CheckReport(
        text=text,
        plagiarism_detected=_is_detected(local, remote),
        local=local,
        remote=remote,
    )


async def check_plagiarism_batch(
    texts: Sequence[str],
    options: Optional[CheckOptions] = None,
    store=None,
    detector=None,
) -> List[CheckReport]:
    """Check several texts against a single read of the corpus."""
    options = options or CheckOptions()

    index: Optional[CorpusIndex] = None
    corpus_error: Optional[LocalCheckResult] = None
    if options.check_local_database:
        try:
            index = CorpusIndex(await _read_corpus(store), k=options.shingle_size)
        except PlagcheckError as e:
            corpus_error = _local_error(e)

    remotes: List[Optional[RemoteCheckResult]] = [None] * len(texts)
    if options.check_remote:
        try:
            if detector is None:
                detector = RapidApiDetector()
        except PlagcheckError as e:
            remotes = [_remote_error(e) for _ in texts]
        else:
            remotes = list(await asyncio.gather(
                *(run_remote_check(t, options, detector) for t in texts)
            ))

    reports: List[CheckReport] = []
    for text, remote in zip(texts, remotes):
        local: Optional[LocalCheckResult] = None
        if index is not None:
            local = LocalCheckResult(matches=index.match(text, options.min_similarity_score))
        elif corpus_error is not None:
            local = corpus_error.model_copy(deep=True)
        reports.append(CheckReport(
            text=text,
            plagiarism_detected=_is_detected(local, remote),
            local=local,
            remote=remote,
        ))

    logger.info(f"Batch check completed for {len(reports)} texts")
    return reports


async def add_document(text: str, store=None) -> AddDocumentResult:
    try:
        if store is None:
            store = MongoDocumentStore()
        inserted_id = await store.insert(text)
    except PlagcheckError as e:
        logger.error(f"Failed to add document to MongoDB: {e}")
        return AddDocumentResult(
            success=False,
            error=f"Failed to add document to database: {e}",
        )

    return AddDocumentResult(
        success=True,
        inserted_id=inserted_id,
        message="Document added to local database successfully.",
    )
