import pytest
from backend.gateway.server import create_app
from backend.slide_service.config import SlideConfig

@pytest.fixture
def image_data_url():
    # 1x1 transparent PNG
    return "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="

@pytest.fixture
def slide_config():
    return SlideConfig(api_key="test-key", model="gpt-4o-mini")

@pytest.fixture
def app(slide_config):
    app = create_app(config=slide_config)
    app.config["TESTING"] = True
    return app

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def mock_openai(mocker):
    """
    Mocks the OpenAI class used by the completion client.
    Returns the mocked client instance (what OpenAI(...) returns).
    """
    mock_cls = mocker.patch("backend.slide_service.completion.OpenAI")
    client = mock_cls.return_value
    # `with OpenAI(...) as client` yields the same mock
    client.__enter__.return_value = client
    return client

@pytest.fixture
def set_completion_content(mock_openai, mocker):
    """
    Makes the mocked chat completion return the given message content.
    """
    def _set(content):
        mock_response = mocker.MagicMock()
        mock_response.choices[0].message.content = content
        mock_openai.chat.completions.create.return_value = mock_response
        return mock_response
    return _set
