"""
テスト設定ファイル
"""

import sys
from pathlib import Path
from typing import Callable, List, Optional
from unittest.mock import Mock

import pytest
import requests

# プロジェクトルートをPythonパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from voicetrans.core.translate import TranslationResult  # noqa: E402


class FakeProvider:
    """呼び出しを記録するテスト用プロバイダー"""

    def __init__(
        self,
        name: str,
        text: Optional[str] = None,
        error: Optional[Exception] = None,
        call_log: Optional[List[str]] = None,
        on_call: Optional[Callable[[], None]] = None,
    ):
        self.name = name
        self.text = text
        self.error = error
        self.calls = []
        self.call_log = call_log if call_log is not None else []
        self.on_call = on_call

    def translate(self, text: str, source_language: str, target_language: str) -> TranslationResult:
        self.calls.append((text, source_language, target_language))
        self.call_log.append(self.name)

        if self.on_call is not None:
            self.on_call()
        if self.error is not None:
            raise self.error

        return TranslationResult(succeeded=True, text=self.text or f"[{target_language}] {text}", provider_id=self.name)


@pytest.fixture
def call_log():
    """プロバイダーの呼び出し順"""
    return []


@pytest.fixture
def make_provider(call_log):
    """FakeProviderを作成するファクトリ"""

    def _make(name: str, text: Optional[str] = None, error: Optional[Exception] = None, on_call=None):
        return FakeProvider(name, text=text, error=error, call_log=call_log, on_call=on_call)

    return _make


@pytest.fixture
def make_response():
    """requests.Responseのモックを作成するファクトリ"""

    def _make(status_code: int = 200, json_data=None, json_error: Optional[Exception] = None):
        response = Mock(spec=requests.Response)
        response.status_code = status_code
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = json_data
        return response

    return _make


@pytest.fixture
def fake_session():
    """requests.Sessionのモック"""
    return Mock(spec=requests.Session)
