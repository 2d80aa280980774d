"""
翻訳システムの統合インターフェース
"""

from .backup_dictionary import BACKUP_PREFIX, BACKUP_PROVIDER_ID, BackupDictionary
from .event_log import EventLog
from .failure_tracker import FailureTracker
from .models import LogLevel, LogRecord, ProviderStatus, TranslationResult
from .provider_apertium import ApertiumProvider
from .provider_base import (
    MalformedResponseError,
    ProviderError,
    RateLimitError,
    TranslationProvider,
    TransportError,
)
from .provider_google import GoogleTranslateProvider
from .provider_libretranslate import LibreTranslateProvider
from .provider_mymemory import MyMemoryProvider
from .translation_service import ProviderDescriptor, TranslationService

__all__ = [
    # Service
    "TranslationService",
    "ProviderDescriptor",
    "TranslationResult",
    "ProviderStatus",
    # Providers
    "TranslationProvider",
    "MyMemoryProvider",
    "LibreTranslateProvider",
    "ApertiumProvider",
    "GoogleTranslateProvider",
    # Fallback
    "BackupDictionary",
    "BACKUP_PREFIX",
    "BACKUP_PROVIDER_ID",
    # State
    "FailureTracker",
    "EventLog",
    "LogRecord",
    "LogLevel",
    # Errors
    "ProviderError",
    "TransportError",
    "RateLimitError",
    "MalformedResponseError",
]
