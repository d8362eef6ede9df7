"""note_archiver package"""

from .config import ArchiveConfig
from .crawler import archive, archive_async
from .errors import ArchiverError, PaginationLimitExceeded, SetupFailure
from .models import ArticleOutcome, ArticleRecord, ArticleRef, ArticleState, RunSummary

__all__ = [
    "ArchiveConfig",
    "archive",
    "archive_async",
    "ArchiverError",
    "PaginationLimitExceeded",
    "SetupFailure",
    "ArticleOutcome",
    "ArticleRecord",
    "ArticleRef",
    "ArticleState",
    "RunSummary",
]
