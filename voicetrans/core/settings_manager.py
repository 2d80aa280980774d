"""
設定ファイル管理クラス
翻訳設定の永続化を行う
"""

import json
import logging
import os
import platform
import shutil
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

SETTINGS_VERSION = "1.0.0"

KNOWN_PROVIDERS = ("MyMemory", "LibreTranslate", "Apertium", "GoogleTranslate")


@dataclass
class LanguageSettings:
    """言語設定"""

    source_language: str = "en"
    target_language: str = "uk"


@dataclass
class NetworkSettings:
    """通信設定"""

    request_timeout: float = 10.0  # 秒


@dataclass
class LogSettings:
    """イベントログ設定"""

    max_log_size: int = 1000


@dataclass
class ProviderSettings:
    """翻訳プロバイダー設定"""

    name: str
    enabled: bool = True
    priority: int = 0


def default_provider_settings() -> List[ProviderSettings]:
    """既定のプロバイダー一覧（優先度順）"""
    return [ProviderSettings(name=name, priority=i) for i, name in enumerate(KNOWN_PROVIDERS)]


@dataclass
class AppSettings:
    """アプリケーション設定"""

    languages: LanguageSettings = field(default_factory=LanguageSettings)
    network: NetworkSettings = field(default_factory=NetworkSettings)
    log: LogSettings = field(default_factory=LogSettings)
    providers: List[ProviderSettings] = field(default_factory=default_provider_settings)
    version: str = SETTINGS_VERSION


class SettingsManager:
    """設定管理クラス"""

    def __init__(self, settings_path: Optional[Path] = None):
        self.logger = logging.getLogger(__name__)
        self._settings_path = Path(settings_path) if settings_path else self._get_settings_path()
        self._settings: Optional[AppSettings] = None

    @property
    def settings_path(self) -> Path:
        return self._settings_path

    def _get_settings_path(self) -> Path:
        """設定ファイルのパスを取得"""
        # プラットフォーム別の設定フォルダ
        if platform.system() == "Windows":
            config_dir = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        elif platform.system() == "Darwin":  # macOS
            config_dir = Path.home() / "Library" / "Application Support"
        else:  # Linux
            config_dir = Path.home() / ".config"

        return config_dir / "voicetrans" / "settings.json"

    def load_settings(self) -> AppSettings:
        """設定を読み込み"""
        if self._settings is not None:
            return self._settings

        try:
            if self._settings_path.exists():
                self.logger.info(f"設定ファイル読み込み: {self._settings_path}")
                with open(self._settings_path, "r", encoding="utf-8") as f:
                    settings_dict = json.load(f)

                file_version = settings_dict.get("version", SETTINGS_VERSION)
                if file_version != SETTINGS_VERSION:
                    self.logger.warning(f"設定ファイルのバージョンが異なります: {file_version}")

                self._settings = self._dict_to_settings(settings_dict)
                self.logger.info("設定読み込み完了")
            else:
                self.logger.info("設定ファイルが見つかりません。デフォルト設定を使用")
                self._settings = AppSettings()

        except (OSError, ValueError, AttributeError) as e:
            self.logger.error(f"設定読み込みエラー: {e}")
            self.logger.info("デフォルト設定を使用")
            self._settings = AppSettings()

        return self._settings

    def save_settings(self, settings: AppSettings) -> bool:
        """設定を保存"""
        try:
            self._settings = settings
            self._settings_path.parent.mkdir(parents=True, exist_ok=True)

            # バックアップを作成
            self._create_backup()

            self.logger.info(f"設定ファイル保存: {self._settings_path}")
            with open(self._settings_path, "w", encoding="utf-8") as f:
                json.dump(asdict(settings), f, indent=2, ensure_ascii=False)

            self.logger.info("設定保存完了")
            return True

        except OSError as e:
            self.logger.error(f"設定保存エラー: {e}")
            return False

    def _dict_to_settings(self, settings_dict: Dict[str, Any]) -> AppSettings:
        """辞書を設定オブジェクトに変換（未知のキーは無視）"""
        settings = AppSettings()

        try:
            if "languages" in settings_dict:
                settings.languages = LanguageSettings(
                    **self._known_fields(settings_dict["languages"], LanguageSettings)
                )

            if "network" in settings_dict:
                settings.network = NetworkSettings(
                    **self._known_fields(settings_dict["network"], NetworkSettings)
                )

            if "log" in settings_dict:
                settings.log = LogSettings(**self._known_fields(settings_dict["log"], LogSettings))

            if "providers" in settings_dict:
                settings.providers = [
                    ProviderSettings(**self._known_fields(item, ProviderSettings))
                    for item in settings_dict["providers"]
                ]

            if "version" in settings_dict:
                settings.version = settings_dict["version"]

            return settings

        except (TypeError, AttributeError) as e:
            self.logger.error(f"設定変換エラー: {e}")
            return AppSettings()

    @staticmethod
    def _known_fields(values: Dict[str, Any], settings_class: type) -> Dict[str, Any]:
        return {k: v for k, v in values.items() if k in settings_class.__dataclass_fields__}

    def _create_backup(self):
        """設定ファイルのバックアップを作成"""
        if self._settings_path.exists():
            backup_path = self._settings_path.with_suffix(".json.backup")
            try:
                shutil.copy2(self._settings_path, backup_path)
                self.logger.debug(f"バックアップ作成: {backup_path}")
            except OSError as e:
                self.logger.warning(f"バックアップ作成失敗: {e}")

    def reset_to_defaults(self) -> AppSettings:
        """設定をデフォルトに戻す"""
        self.logger.info("設定をデフォルトに戻します")
        default_settings = AppSettings()
        if self.save_settings(default_settings):
            return default_settings
        return self.load_settings()

    def validate_settings(self, settings: AppSettings) -> List[str]:
        """設定の妥当性を確認"""
        errors = []

        for label, code in (
            ("翻訳元言語", settings.languages.source_language),
            ("翻訳先言語", settings.languages.target_language),
        ):
            if not (isinstance(code, str) and len(code) == 2 and code.isalpha()):
                errors.append(f"{label}は2文字の言語コードで設定してください: {code}")

        if settings.network.request_timeout <= 0:
            errors.append("タイムアウトは0より大きい値を設定してください")

        if settings.log.max_log_size < 1:
            errors.append("ログの最大件数は1以上を設定してください")

        names = [provider.name for provider in settings.providers]
        for name in names:
            if name not in KNOWN_PROVIDERS:
                errors.append(f"未対応の翻訳プロバイダー: {name}")
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            errors.append(f"翻訳プロバイダーが重複しています: {', '.join(duplicates)}")

        return errors


# シングルトンインスタンス
_settings_manager_instance = None


def get_settings_manager() -> SettingsManager:
    """設定マネージャーのシングルトンインスタンスを取得"""
    global _settings_manager_instance
    if _settings_manager_instance is None:
        _settings_manager_instance = SettingsManager()
    return _settings_manager_instance
