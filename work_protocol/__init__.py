"""
Work Protocol - A modular tool for generating monthly work protocols from selected GitHub commits.
"""

from .models import (
    CommitEntry,
    CommitGroup,
    CommitInfo,
    CompiledCommit,
    DocumentPayload,
    Repository,
    RepositoryEntry,
    UserData,
    UserMetadata,
)
from .exceptions import InvalidMetadata, ProviderError, TemplateError, WorkProtocolError
from .parser import CommitMessageParser, ParsedMessage
from .store import SelectionStore
from .compiler import ReportCompiler, compile_report, format_month_range, format_month_year
from .fetcher import GitHubFetcher
from .renderer import DocxTemplateRenderer
from .sink import FileSink, suggested_filename
from .session import FetchScope, ReportSession
from .main import main

__all__ = [
    'CommitEntry',
    'CommitGroup',
    'CommitInfo',
    'CompiledCommit',
    'DocumentPayload',
    'Repository',
    'RepositoryEntry',
    'UserData',
    'UserMetadata',
    'InvalidMetadata',
    'ProviderError',
    'TemplateError',
    'WorkProtocolError',
    'CommitMessageParser',
    'ParsedMessage',
    'SelectionStore',
    'ReportCompiler',
    'compile_report',
    'format_month_range',
    'format_month_year',
    'GitHubFetcher',
    'DocxTemplateRenderer',
    'FileSink',
    'suggested_filename',
    'FetchScope',
    'ReportSession',
    'main'
]
