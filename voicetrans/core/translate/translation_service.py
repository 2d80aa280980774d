"""
翻訳サービス（自動フォールバック）
複数の翻訳プロバイダーを優先度順に試し、すべて失敗した場合は辞書翻訳を使う
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from ..settings_manager import AppSettings
from .backup_dictionary import BACKUP_PROVIDER_ID, BackupDictionary
from .event_log import EventLog
from .failure_tracker import FailureTracker
from .models import LogLevel, LogRecord, ProviderStatus, TranslationResult
from .provider_apertium import ApertiumProvider
from .provider_base import DEFAULT_TIMEOUT, RateLimitError, TranslationProvider
from .provider_google import GoogleTranslateProvider
from .provider_libretranslate import LibreTranslateProvider
from .provider_mymemory import MyMemoryProvider

PREVIEW_LENGTH = 50

PROVIDER_CLASSES = {
    MyMemoryProvider.name: MyMemoryProvider,
    LibreTranslateProvider.name: LibreTranslateProvider,
    ApertiumProvider.name: ApertiumProvider,
    GoogleTranslateProvider.name: GoogleTranslateProvider,
}

_PYTHON_LOG_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.SUCCESS: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


@dataclass
class ProviderDescriptor:
    """サービスに登録された翻訳プロバイダー"""
    identifier: str
    priority: int
    adapter: Any  # translate(text, source_language, target_language) -> TranslationResult
    enabled: bool = True


def is_rate_limit_error(error: Exception) -> bool:
    """レート制限によるエラーか判定"""
    if isinstance(error, RateLimitError):
        return True
    message = str(error)
    return "429" in message or "limit" in message.lower()


class TranslationService:
    """自動フォールバック付き翻訳サービス"""

    def __init__(
        self,
        providers: Optional[List[ProviderDescriptor]] = None,
        event_log: Optional[EventLog] = None,
        failure_tracker: Optional[FailureTracker] = None,
        backup: Optional[BackupDictionary] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.logger = logging.getLogger(__name__)

        if providers is None:
            session = session or requests.Session()
            providers = [
                ProviderDescriptor(
                    identifier=name,
                    priority=priority,
                    adapter=provider_class(session=session, timeout=timeout),
                )
                for priority, (name, provider_class) in enumerate(PROVIDER_CLASSES.items())
            ]

        identifiers = [descriptor.identifier for descriptor in providers]
        if len(set(identifiers)) != len(identifiers):
            raise ValueError(f"プロバイダー識別子が重複しています: {identifiers}")

        self.providers: List[ProviderDescriptor] = list(providers)
        self.event_log = event_log if event_log is not None else EventLog()
        self.failure_tracker = failure_tracker if failure_tracker is not None else FailureTracker()
        self.backup = backup if backup is not None else BackupDictionary()

        # 同時に実行される翻訳は1件まで
        self._translate_lock = threading.Lock()

    @classmethod
    def from_settings(
        cls, settings: AppSettings, session: Optional[requests.Session] = None
    ) -> "TranslationService":
        """設定からサービスを作成"""
        session = session or requests.Session()
        timeout = settings.network.request_timeout

        descriptors = []
        for provider_settings in settings.providers:
            provider_class = PROVIDER_CLASSES.get(provider_settings.name)
            if provider_class is None:
                raise ValueError(f"未対応の翻訳プロバイダー: {provider_settings.name}")

            descriptors.append(
                ProviderDescriptor(
                    identifier=provider_settings.name,
                    priority=provider_settings.priority,
                    adapter=provider_class(session=session, timeout=timeout),
                    enabled=provider_settings.enabled,
                )
            )

        return cls(providers=descriptors, event_log=EventLog(settings.log.max_log_size))

    def translate(self, text: str, source_language: str, target_language: str) -> TranslationResult:
        """翻訳実行（例外は送出しない）"""
        with self._translate_lock:
            return self._translate(text, source_language, target_language)

    def _translate(self, text: str, source_language: str, target_language: str) -> TranslationResult:
        if not text or not text.strip():
            self._log(LogLevel.WARN, "空のテキストの翻訳が要求されました")
            return TranslationResult(succeeded=False, text="")

        self._log(LogLevel.INFO, f'翻訳開始: "{text[:PREVIEW_LENGTH]}..."', details={
            "source_language": source_language,
            "target_language": target_language,
            "text_length": len(text),
        })

        candidates = self._candidate_providers()
        self._log(
            LogLevel.INFO,
            f"利用可能なプロバイダー: {', '.join(c.identifier for c in candidates)}",
            details={
                "total": len(candidates),
                "failed": self.failure_tracker.failed_ids(),
            },
        )

        if not candidates:
            self._log(LogLevel.ERROR, "利用可能な翻訳プロバイダーがありません")
            return self._use_backup(text)

        for descriptor in candidates:
            identifier = descriptor.identifier
            self._log(LogLevel.INFO, f"{identifier}で翻訳を試行", identifier)

            start_time = time.perf_counter()
            try:
                result = descriptor.adapter.translate(text, source_language, target_language)
            except Exception as e:
                self._log(LogLevel.ERROR, f"{identifier}で翻訳エラー", identifier, {"error": str(e)})

                if is_rate_limit_error(e):
                    self.failure_tracker.mark_failed(identifier)
                    self._log(LogLevel.WARN, f"{identifier}のレート制限を超過しました", identifier)
                continue

            duration_ms = int((time.perf_counter() - start_time) * 1000)

            if result.succeeded:
                self._log(LogLevel.SUCCESS, f"{identifier}で翻訳成功", identifier, {
                    "duration": f"{duration_ms}ms",
                    "text_length": len(result.text),
                })
                # 成功したプロバイダーは回復したとみなす
                self.failure_tracker.clear(identifier)
                return result

            self._log(LogLevel.WARN, f"{identifier}から翻訳結果が得られませんでした", identifier)

        self._log(LogLevel.ERROR, "すべての翻訳プロバイダーで失敗しました", details={
            "failed": self.failure_tracker.failed_ids(),
        })
        return self._use_backup(text)

    def _candidate_providers(self) -> List[ProviderDescriptor]:
        """有効かつ失敗記録のないプロバイダーを優先度順で返す"""
        candidates = [
            descriptor for descriptor in self.providers
            if descriptor.enabled and not self.failure_tracker.contains(descriptor.identifier)
        ]
        # sortedは安定ソートなので同じ優先度は登録順のまま
        return sorted(candidates, key=lambda descriptor: descriptor.priority)

    def _use_backup(self, text: str) -> TranslationResult:
        self._log(LogLevel.WARN, "辞書による予備翻訳を使用します", BACKUP_PROVIDER_ID)
        return self.backup.translate(text)

    def reset_failures(self):
        """失敗記録をすべて解除"""
        self.failure_tracker.reset_all()
        self._log(LogLevel.INFO, "失敗したプロバイダーの記録をリセットしました")

    def set_provider_enabled(self, identifier: str, enabled: bool):
        """プロバイダーの有効・無効を切り替え"""
        descriptor = self._find_provider(identifier)
        descriptor.enabled = enabled
        state = "有効" if enabled else "無効"
        self._log(LogLevel.INFO, f"{identifier}を{state}にしました", identifier)

    def _find_provider(self, identifier: str) -> ProviderDescriptor:
        for descriptor in self.providers:
            if descriptor.identifier == identifier:
                return descriptor
        raise ValueError(f"未登録のプロバイダー: {identifier}")

    def get_provider_status(self) -> List[ProviderStatus]:
        """登録順のプロバイダー状態一覧"""
        return [
            ProviderStatus(
                identifier=descriptor.identifier,
                enabled=descriptor.enabled,
                failed=self.failure_tracker.contains(descriptor.identifier),
                priority=descriptor.priority,
            )
            for descriptor in self.providers
        ]

    def get_log_snapshot(self) -> List[LogRecord]:
        return self.event_log.snapshot()

    def clear_log(self):
        """イベントログを消去（消去自体はイベントログに記録しない）"""
        self.event_log.clear()
        self.logger.info("翻訳イベントログを消去しました")

    def _log(
        self,
        level: LogLevel,
        message: str,
        provider_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """イベントログに追加し、loggingにも出力"""
        record = LogRecord(level=level, message=message, provider_id=provider_id, details=details)
        self.event_log.append(record)

        prefix = f"[{provider_id}] " if provider_id else ""
        suffix = f" {details}" if details else ""
        self.logger.log(_PYTHON_LOG_LEVELS[level], f"{prefix}{message}{suffix}")
