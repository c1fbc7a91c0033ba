"""
Tests for the Pinterest and OpenAI integration clients (HTTP mocked).
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import requests


def _response(status_code=200, body=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    resp.text = text
    return resp


@pytest.fixture
def http():
    return MagicMock()


@pytest.fixture
def pinterest(test_settings, http):
    from integrations.pinterest_client import PinterestClient
    return PinterestClient(test_settings, http=http)


class TestPinterestClient:
    """Tests for PinterestClient."""

    def test_list_board_pins_request(self, pinterest, http):
        http.get.return_value = _response(body={
            "items": [{"id": 1, "title": "Boho"}, "junk"],
            "bookmark": "next",
        })

        page = pinterest.list_board_pins("tok", "board/1", page_size=50, bookmark="prev")

        url = http.get.call_args.args[0]
        kwargs = http.get.call_args.kwargs
        assert url == "https://api.pinterest.com/v5/boards/board%2F1/pins"
        assert kwargs["headers"] == {"Authorization": "Bearer tok"}
        assert kwargs["params"] == {"page_size": 50, "bookmark": "prev"}
        assert kwargs["timeout"] == 10
        assert [pin.id for pin in page.items] == ["1"]
        assert page.bookmark == "next"

    def test_first_page_has_no_bookmark_param(self, pinterest, http):
        http.get.return_value = _response(body={"items": []})

        pinterest.list_boards("tok", page_size=25)

        assert http.get.call_args.kwargs["params"] == {"page_size": 25}

    def test_empty_bookmark_means_last_page(self, pinterest, http):
        http.get.return_value = _response(body={"items": [], "bookmark": ""})

        assert pinterest.list_board_pins("tok", "b1").bookmark is None

    def test_error_status_raises(self, pinterest, http):
        from integrations.pinterest_client import PinterestApiError

        http.get.return_value = _response(status_code=403, body={"code": 3, "message": "Forbidden"})

        with pytest.raises(PinterestApiError) as exc_info:
            pinterest.list_boards("tok")

        assert exc_info.value.status_code == 403
        assert exc_info.value.details == {"code": 3, "message": "Forbidden"}

    def test_non_json_error_keeps_text(self, pinterest, http):
        from integrations.pinterest_client import PinterestApiError

        http.get.return_value = _response(status_code=502, body=ValueError("no json"), text="Bad Gateway")

        with pytest.raises(PinterestApiError) as exc_info:
            pinterest.list_board_pins("tok", "b1")

        assert exc_info.value.details == "Bad Gateway"

    def test_non_object_body_raises(self, pinterest, http):
        from integrations.pinterest_client import PinterestApiError

        http.get.return_value = _response(body=["not", "an", "object"])

        with pytest.raises(PinterestApiError):
            pinterest.list_boards("tok")

    def test_network_error_raises(self, pinterest, http):
        from integrations.pinterest_client import PinterestApiError

        http.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(PinterestApiError) as exc_info:
            pinterest.list_boards("tok")

        assert exc_info.value.status_code is None


class TestOpenAIEmbedder:
    """Tests for OpenAIEmbedder."""

    @pytest.fixture
    def embedder(self, test_settings):
        from integrations.openai_embeddings import OpenAIEmbedder

        embedder = OpenAIEmbedder(test_settings)
        embedder._client = MagicMock()
        return embedder

    def test_configured(self, test_settings):
        from integrations.openai_embeddings import OpenAIEmbedder

        assert OpenAIEmbedder(test_settings).configured is True
        assert OpenAIEmbedder(test_settings.model_copy(update={"openai_api_key": ""})).configured is False

    def test_model_from_settings(self, test_settings):
        from integrations.openai_embeddings import OpenAIEmbedder

        settings = test_settings.model_copy(update={"openai_embed_model": "text-embedding-3-large"})

        assert OpenAIEmbedder(settings).model == "text-embedding-3-large"

    def test_embed_orders_by_index(self, embedder):
        embedder._client.embeddings.create.return_value = SimpleNamespace(data=[
            SimpleNamespace(index=1, embedding=[0.0, 1.0]),
            SimpleNamespace(index=0, embedding=[1.0, 0.0]),
        ])

        vectors = embedder.embed(["first", "second"])

        assert vectors == [[1.0, 0.0], [0.0, 1.0]]
        embedder._client.embeddings.create.assert_called_once_with(
            model=embedder.model, input=["first", "second"],
        )

    def test_empty_batch_skips_request(self, embedder):
        assert embedder.embed([]) == []
        embedder._client.embeddings.create.assert_not_called()

    def test_count_mismatch_raises(self, embedder):
        from integrations.openai_embeddings import EmbeddingApiError

        embedder._client.embeddings.create.return_value = SimpleNamespace(data=[
            SimpleNamespace(index=0, embedding=[1.0]),
        ])

        with pytest.raises(EmbeddingApiError):
            embedder.embed(["a", "b"])

    def test_provider_error_maps_status_and_message(self, embedder):
        import httpx
        import openai
        from integrations.openai_embeddings import EmbeddingApiError

        request = httpx.Request("POST", "https://api.openai.com/v1/embeddings")
        body = {"error": {"message": "Incorrect API key provided", "type": "invalid_request_error"}}
        embedder._client.embeddings.create.side_effect = openai.AuthenticationError(
            "Error code: 401",
            response=httpx.Response(401, request=request, json=body),
            body=body,
        )

        with pytest.raises(EmbeddingApiError) as exc_info:
            embedder.embed(["a"])

        assert exc_info.value.status_code == 401
        assert str(exc_info.value) == "Incorrect API key provided"
        assert exc_info.value.details == body

    def test_connection_error_maps_without_status(self, embedder):
        import httpx
        import openai
        from integrations.openai_embeddings import EmbeddingApiError

        request = httpx.Request("POST", "https://api.openai.com/v1/embeddings")
        embedder._client.embeddings.create.side_effect = openai.APIConnectionError(request=request)

        with pytest.raises(EmbeddingApiError) as exc_info:
            embedder.embed(["a"])

        assert exc_info.value.status_code is None


class TestPayloadModels:
    """Tests for lenient parsing of Pinterest payloads."""

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), "wide", None])
    def test_unreadable_image_dimensions_become_none(self, value):
        from integrations.pinterest_models import PinPage

        page = PinPage.model_validate({
            "items": [
                {"id": "p1", "media": {"images": {"736x": {"url": "https://i.example.com/a.jpg", "width": value}}}},
                {"id": "p2", "media": {"images": {"736x": {"url": "https://i.example.com/b.jpg", "width": 736}}}},
            ],
        })

        assert [pin.id for pin in page.items] == ["p1", "p2"]
        assert page.items[0].media.images["736x"].width is None
        assert page.items[1].media.images["736x"].width == 736

    def test_infinite_pin_count_becomes_none(self):
        from integrations.pinterest_models import BoardPage

        page = BoardPage.model_validate({
            "items": [{"id": "b1", "name": "Summer", "pin_count": float("inf")}, {"id": "b2", "pin_count": "12"}],
        })

        assert [board.pin_count for board in page.items] == [None, 12]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
