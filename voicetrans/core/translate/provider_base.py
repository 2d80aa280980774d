"""
翻訳プロバイダーの共通実装
HTTP呼び出し・ステータス判定・エラー分類をまとめる
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from .models import TranslationResult

DEFAULT_TIMEOUT = 10.0


class ProviderError(Exception):
    """翻訳プロバイダー関連エラー"""

    def __init__(
        self,
        message: str,
        provider: str = "",
        error_code: str = "",
        status_code: int = 0,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.error_code = error_code
        self.status_code = status_code
        self.original_error = original_error


class TransportError(ProviderError):
    """ネットワーク・HTTPエラー"""
    pass


class RateLimitError(TransportError):
    """レート制限（HTTP 429）"""
    pass


class MalformedResponseError(ProviderError):
    """レスポンスに翻訳結果が含まれていない"""
    pass


def encode_uri_component(text: str) -> str:
    """JavaScriptのencodeURIComponentと同じ規則でエンコード"""
    return quote(text, safe="!*'()")


class TranslationProvider:
    """翻訳プロバイダーの基底クラス

    サブクラスは ``name`` と ``url`` を定義し、``_request_translation`` で
    プロバイダー固有のリクエスト生成とレスポンス解析を行う。
    """

    name: str = ""
    url: str = ""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def translate(self, text: str, source_language: str, target_language: str) -> TranslationResult:
        """翻訳実行

        Raises:
            ProviderError: 通信失敗・レート制限・不正なレスポンス
        """
        try:
            translated_text = self._request_translation(text, source_language, target_language)

        except ProviderError:
            raise
        except requests.exceptions.Timeout as e:
            raise self._error(TransportError, "Request timed out", "TIMEOUT", original_error=e)
        except requests.exceptions.ConnectionError as e:
            # requestsの例外文字列にはURL（入力テキストを含む）が入るため、メッセージには使わない
            raise self._error(TransportError, "Connection error", "NETWORK_ERROR", original_error=e)
        except requests.exceptions.RequestException as e:
            raise self._error(
                TransportError, f"Request failed: {type(e).__name__}", "REQUEST_FAILED", original_error=e
            )

        self.logger.debug(f"{self.name} 翻訳完了: {len(text)}文字 -> {len(translated_text)}文字")
        return TranslationResult(succeeded=True, text=translated_text, provider_id=self.name)

    def _request_translation(self, text: str, source_language: str, target_language: str) -> str:
        """プロバイダー固有の翻訳リクエスト（サブクラスで実装）"""
        raise NotImplementedError

    def _error(
        self,
        error_class: type,
        message: str,
        error_code: str,
        status_code: int = 0,
        original_error: Optional[Exception] = None,
    ) -> ProviderError:
        """プロバイダー名を付けたエラーを作成"""
        return error_class(
            f"{self.name} failed: {message}",
            provider=self.name,
            error_code=error_code,
            status_code=status_code,
            original_error=original_error,
        )

    def _get_json(self, url: str) -> Any:
        response = self.session.get(url, timeout=self.timeout)
        return self._parse_response(response)

    def _post_json(self, url: str, payload: Dict[str, Any]) -> Any:
        response = self.session.post(
            url,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        return self._parse_response(response)

    def _parse_response(self, response: requests.Response) -> Any:
        """ステータス確認とJSON解析"""
        status_code = response.status_code

        if status_code == 429:
            raise self._error(RateLimitError, "429 - Rate limit exceeded", "RATE_LIMITED", 429)

        if not 200 <= status_code < 300:
            raise self._error(TransportError, f"HTTP error: {status_code}", "HTTP_ERROR", status_code)

        try:
            return response.json()
        except ValueError as e:
            raise self._error(
                MalformedResponseError, "Invalid JSON response", "INVALID_RESPONSE", status_code, e
            )

    def _no_translation(self) -> ProviderError:
        return self._error(MalformedResponseError, "No translation received", "NO_TRANSLATION")
