"""Text-editor core: charset and line-ending detection, caseless search, file I/O and pagination."""

__version__ = "0.1.0"
__all__ = ["encoding", "search", "fileio", "paging"]