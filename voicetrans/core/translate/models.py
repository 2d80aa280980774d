"""
翻訳レイヤーのデータモデル定義
翻訳結果・ログレコード・プロバイダー状態
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class LogLevel(Enum):
    """イベントログのレベル"""
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"


@dataclass
class TranslationResult:
    """翻訳結果"""
    succeeded: bool
    text: str
    provider_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return {
            "succeeded": self.succeeded,
            "text": self.text,
            "provider_id": self.provider_id,
        }


@dataclass(frozen=True)
class LogRecord:
    """イベントログの1レコード（作成後は変更しない）"""
    level: LogLevel
    message: str
    provider_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return {
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "provider_id": self.provider_id,
            "message": self.message,
            "details": self.details,
        }

    def format_line(self) -> str:
        """1行表示用の文字列"""
        time_str = self.timestamp.strftime("%H:%M:%S")
        return f"[{time_str}] {self.level.value:<7} {self.provider_id or 'SYSTEM'}: {self.message}"


@dataclass
class ProviderStatus:
    """プロバイダーの状態"""
    identifier: str
    enabled: bool
    failed: bool
    priority: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "enabled": self.enabled,
            "failed": self.failed,
            "priority": self.priority,
        }
