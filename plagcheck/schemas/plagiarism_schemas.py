from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from plagcheck.config import (
    DEFAULT_MIN_SIMILARITY,
    DEFAULT_SHINGLE_SIZE,
    MAX_SHINGLE_SIZE,
    MIN_SHINGLE_SIZE,
)


class MatchResult(BaseModel):
    source: str             # "Local Database"
    document_id: str
    similarity: float       # Jaccard score 0-1, rounded to 4 places
    matched_content: str    # first 200 chars of the stored text + "..."


class StrategyError(BaseModel):
    error: str
    status_code: Optional[int] = None
    response_data: Any = None


class LocalCheckResult(BaseModel):
    matches: List[MatchResult] = Field(default_factory=list)
    error: Optional[StrategyError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def found(self) -> bool:
        return self.ok and len(self.matches) > 0


class RemoteCheckResult(BaseModel):
    result: Optional[Dict[str, Any]] = None
    error: Optional[StrategyError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def plagiarism_percentage(self) -> float:
        value = (self.result or {}).get("totalPlagiarismPercentage")
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            return 0.0
        try:
            return float(value)
        except ValueError:   # "high", "" ...
            return 0.0

    @property
    def found(self) -> bool:
        return self.ok and self.plagiarism_percentage > 0


class CheckOptions(BaseModel):
    check_local_database: bool = True
    check_remote: bool = False
    min_similarity_score: float = Field(default=DEFAULT_MIN_SIMILARITY, ge=0.0, le=1.0)
    shingle_size: int = Field(default=DEFAULT_SHINGLE_SIZE, ge=MIN_SHINGLE_SIZE, le=MAX_SHINGLE_SIZE)
    include_citations: bool = False
    scrape_sources: bool = False


class CheckReport(BaseModel):
    text: str
    plagiarism_detected: bool
    local: Optional[LocalCheckResult] = None     # None when the strategy was not requested
    remote: Optional[RemoteCheckResult] = None
