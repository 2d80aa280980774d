"""
翻訳プロバイダー（HTTPアダプター）のテスト
"""

import pytest
import requests

from voicetrans.core.translate import (
    ApertiumProvider,
    GoogleTranslateProvider,
    LibreTranslateProvider,
    MalformedResponseError,
    MyMemoryProvider,
    ProviderError,
    RateLimitError,
    TransportError,
)
from voicetrans.core.translate.provider_base import encode_uri_component

GET_PROVIDERS = [MyMemoryProvider, ApertiumProvider, GoogleTranslateProvider]
ALL_PROVIDERS = GET_PROVIDERS + [LibreTranslateProvider]


def set_response(session, provider_class, response):
    if provider_class is LibreTranslateProvider:
        session.post.return_value = response
    else:
        session.get.return_value = response


class TestEncodeUriComponent:
    """URLエンコードのテスト"""

    def test_space_and_reserved_characters(self):
        assert encode_uri_component("a&b=c d/e?") == "a%26b%3Dc%20d%2Fe%3F"

    def test_unreserved_characters_kept(self):
        assert encode_uri_component("Aa1-_.!~*'()") == "Aa1-_.!~*'()"

    def test_non_ascii_is_utf8_encoded(self):
        assert encode_uri_component("é") == "%C3%A9"
        assert encode_uri_component("світ") == "%D1%81%D0%B2%D1%96%D1%82"


class TestMyMemoryProvider:
    """MyMemoryプロバイダーのテスト"""

    def test_success(self, fake_session, make_response):
        fake_session.get.return_value = make_response(json_data={
            "responseData": {"translatedText": "привіт світ"},
            "responseStatus": 200,
        })
        provider = MyMemoryProvider(session=fake_session)

        result = provider.translate("hello world", "en", "uk")

        assert result.succeeded
        assert result.text == "привіт світ"
        assert result.provider_id == "MyMemory"
        fake_session.get.assert_called_once_with(
            "https://api.mymemory.translated.net/get?q=hello%20world&langpair=en|uk",
            timeout=10.0,
        )

    def test_response_status_as_string(self, fake_session, make_response):
        fake_session.get.return_value = make_response(json_data={
            "responseData": {"translatedText": "так"},
            "responseStatus": "200",
        })

        result = MyMemoryProvider(session=fake_session).translate("yes", "en", "uk")

        assert result.text == "так"

    def test_api_error_status(self, fake_session, make_response):
        """本体のresponseStatusが200以外"""
        fake_session.get.return_value = make_response(json_data={
            "responseData": {"translatedText": "INVALID LANGUAGE PAIR"},
            "responseStatus": 403,
        })

        with pytest.raises(ProviderError) as exc_info:
            MyMemoryProvider(session=fake_session).translate("hello", "en", "xx")

        assert not isinstance(exc_info.value, RateLimitError)
        assert str(exc_info.value) == "MyMemory failed: API error: 403"
        assert exc_info.value.error_code == "API_ERROR"

    @pytest.mark.parametrize("response_data", [{}, None, "not found", ["привіт"]])
    def test_missing_translated_text(self, fake_session, make_response, response_data):
        fake_session.get.return_value = make_response(
            json_data={"responseData": response_data, "responseStatus": 200}
        )

        with pytest.raises(MalformedResponseError):
            MyMemoryProvider(session=fake_session).translate("hello", "en", "uk")


class TestLibreTranslateProvider:
    """LibreTranslateプロバイダーのテスト"""

    def test_success(self, fake_session, make_response):
        fake_session.post.return_value = make_response(json_data={"translatedText": "привіт"})
        provider = LibreTranslateProvider(session=fake_session, timeout=5.0)

        result = provider.translate("hello", "en", "uk")

        assert result.text == "привіт"
        assert result.provider_id == "LibreTranslate"
        fake_session.post.assert_called_once_with(
            "https://libretranslate.com/translate",
            json={"q": "hello", "source": "en", "target": "uk", "format": "text"},
            headers={"Content-Type": "application/json"},
            timeout=5.0,
        )

    def test_unmapped_language_passed_through(self, fake_session, make_response):
        fake_session.post.return_value = make_response(json_data={"translatedText": "hallo"})

        LibreTranslateProvider(session=fake_session).translate("hello", "en", "de")

        payload = fake_session.post.call_args.kwargs["json"]
        assert payload["target"] == "de"

    def test_missing_translated_text(self, fake_session, make_response):
        fake_session.post.return_value = make_response(json_data={"error": "bad"})

        with pytest.raises(MalformedResponseError) as exc_info:
            LibreTranslateProvider(session=fake_session).translate("hello", "en", "uk")

        assert "No translation received" in str(exc_info.value)


class TestApertiumProvider:
    """Apertiumプロバイダーのテスト"""

    def test_success(self, fake_session, make_response):
        fake_session.get.return_value = make_response(json_data={
            "responseData": {"translatedText": "добрий ранок"},
            "responseStatus": 200,
        })

        result = ApertiumProvider(session=fake_session).translate("good morning", "en", "uk")

        assert result.text == "добрий ранок"
        assert result.provider_id == "Apertium"
        fake_session.get.assert_called_once_with(
            "https://apertium.org/apy/translate?q=good%20morning&langpair=en|uk",
            timeout=10.0,
        )

    @pytest.mark.parametrize("json_data", [{}, {"responseData": None}, {"responseData": {}}, []])
    def test_missing_translated_text(self, fake_session, make_response, json_data):
        fake_session.get.return_value = make_response(json_data=json_data)

        with pytest.raises(MalformedResponseError):
            ApertiumProvider(session=fake_session).translate("hello", "en", "uk")


class TestGoogleTranslateProvider:
    """Google翻訳プロバイダーのテスト"""

    def test_success(self, fake_session, make_response):
        fake_session.get.return_value = make_response(
            json_data=[[["привіт світ", "hello world", None, None, 10]], None, "en"]
        )

        result = GoogleTranslateProvider(session=fake_session).translate("hello world", "en", "uk")

        assert result.text == "привіт світ"
        assert result.provider_id == "GoogleTranslate"
        fake_session.get.assert_called_once_with(
            "https://translate.googleapis.com/translate_a/single"
            "?client=gtx&sl=en&tl=uk&dt=t&q=hello%20world",
            timeout=10.0,
        )

    def test_only_first_segment_is_used(self, fake_session, make_response):
        fake_session.get.return_value = make_response(
            json_data=[[["Привіт. ", "Hello. "], ["Як справи?", "How are you?"]], None, "en"]
        )

        result = GoogleTranslateProvider(session=fake_session).translate("Hello. How are you?", "en", "uk")

        assert result.text == "Привіт. "

    @pytest.mark.parametrize("json_data", [[], [[]], [[[]]], [[[""]]], None, {"sentences": []}])
    def test_missing_translated_text(self, fake_session, make_response, json_data):
        fake_session.get.return_value = make_response(json_data=json_data)

        with pytest.raises(MalformedResponseError):
            GoogleTranslateProvider(session=fake_session).translate("hello", "en", "uk")


@pytest.mark.parametrize("provider_class", ALL_PROVIDERS)
class TestCommonErrorHandling:
    """全プロバイダー共通のエラー処理"""

    def test_rate_limit(self, fake_session, make_response, provider_class):
        """HTTP 429はRateLimitError"""
        set_response(fake_session, provider_class, make_response(status_code=429))

        with pytest.raises(RateLimitError) as exc_info:
            provider_class(session=fake_session).translate("hello", "en", "uk")

        error = exc_info.value
        assert "429" in str(error)
        assert str(error).startswith(f"{provider_class.name} failed: ")
        assert error.status_code == 429
        assert error.provider == provider_class.name

    @pytest.mark.parametrize("status_code", [400, 403, 500, 503])
    def test_http_error(self, fake_session, make_response, provider_class, status_code):
        set_response(fake_session, provider_class, make_response(status_code=status_code))

        with pytest.raises(TransportError) as exc_info:
            provider_class(session=fake_session).translate("hello", "en", "uk")

        assert not isinstance(exc_info.value, RateLimitError)
        assert f"HTTP error: {status_code}" in str(exc_info.value)
        assert "429" not in str(exc_info.value)
        assert exc_info.value.status_code == status_code

    def test_invalid_json(self, fake_session, make_response, provider_class):
        set_response(fake_session, provider_class, make_response(json_error=ValueError("Expecting value")))

        with pytest.raises(MalformedResponseError) as exc_info:
            provider_class(session=fake_session).translate("hello", "en", "uk")

        assert exc_info.value.error_code == "INVALID_RESPONSE"

    @pytest.mark.parametrize("exception, error_code", [
        (requests.exceptions.Timeout("read timed out"), "TIMEOUT"),
        (requests.exceptions.ConnectionError("refused"), "NETWORK_ERROR"),
        (requests.exceptions.TooManyRedirects("loop"), "REQUEST_FAILED"),
    ])
    def test_network_errors(self, fake_session, provider_class, exception, error_code):
        fake_session.get.side_effect = exception
        fake_session.post.side_effect = exception

        with pytest.raises(TransportError) as exc_info:
            provider_class(session=fake_session).translate("hello", "en", "uk")

        assert exc_info.value.error_code == error_code
        assert exc_info.value.original_error is exception

    @pytest.mark.parametrize("exception", [
        requests.exceptions.ConnectionError(
            "HTTPSConnectionPool(host='example.org', port=443): Max retries exceeded "
            "with url: /get?q=speed%20limit%20429&langpair=en%7Cuk"
        ),
        requests.exceptions.TooManyRedirects("Exceeded 30 redirects: /get?q=speed%20limit%20429"),
    ])
    def test_network_error_message_excludes_request_url(self, fake_session, provider_class, exception):
        """例外文字列のURL（入力テキスト）はメッセージに含めない"""
        fake_session.get.side_effect = exception
        fake_session.post.side_effect = exception

        with pytest.raises(TransportError) as exc_info:
            provider_class(session=fake_session).translate("speed limit 429", "en", "uk")

        message = str(exc_info.value)
        assert "speed" not in message
        assert "limit" not in message.lower()
        assert "429" not in message
        assert exc_info.value.original_error is exception
