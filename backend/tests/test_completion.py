import pytest
import httpx
from openai import APIStatusError

from backend.slide_service.completion import (
    CompletionServiceError, build_messages, request_slide_completion,
    SYSTEM_PROMPT, USER_PROMPT
)

IMAGE = "data:image/jpeg;base64,/9j/4AAQSkZJRg=="

def test_build_messages():
    messages = build_messages(IMAGE)
    assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert messages[1]["role"] == "user"
    assert messages[1]["content"][0] == {"type": "text", "text": USER_PROMPT}
    assert messages[1]["content"][1] == {"type": "image_url", "image_url": {"url": IMAGE}}

def test_system_prompt_rules():
    assert "<=80 chars" in SYSTEM_PROMPT
    assert '"(?)"' in SYSTEM_PROMPT
    assert "No extra commentary beyond JSON." in SYSTEM_PROMPT

def test_client_is_single_attempt(mocker, slide_config):
    mock_cls = mocker.patch("backend.slide_service.completion.OpenAI")
    mock_cls.return_value.__enter__.return_value = mock_cls.return_value
    mock_response = mocker.MagicMock()
    mock_response.choices[0].message.content = '{"title": "T"}'
    mock_cls.return_value.chat.completions.create.return_value = mock_response

    assert request_slide_completion(slide_config, IMAGE) == '{"title": "T"}'
    mock_cls.assert_called_once_with(api_key="test-key", base_url=None, max_retries=0)

def test_missing_content_returns_empty_object(set_completion_content, slide_config):
    set_completion_content(None)
    assert request_slide_completion(slide_config, IMAGE) == "{}"

def test_no_choices_returns_empty_object(set_completion_content, slide_config):
    mock_response = set_completion_content("ignored")
    mock_response.choices = []
    assert request_slide_completion(slide_config, IMAGE) == "{}"

def test_status_error_is_translated(mock_openai, slide_config):
    upstream = httpx.Response(
        401,
        text='{"error": {"message": "Incorrect API key provided"}}',
        request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    )
    mock_openai.chat.completions.create.side_effect = APIStatusError(
        "unauthorized", response=upstream, body=None
    )

    with pytest.raises(CompletionServiceError) as exc_info:
        request_slide_completion(slide_config, IMAGE)

    assert exc_info.value.status_code == 401
    assert "Incorrect API key provided" in exc_info.value.detail

def test_other_errors_propagate(mock_openai, slide_config):
    mock_openai.chat.completions.create.side_effect = TimeoutError("timed out")
    with pytest.raises(TimeoutError):
        request_slide_completion(slide_config, IMAGE)

def test_client_is_closed_after_call(set_completion_content, mock_openai, slide_config):
    set_completion_content('{"title": "T"}')
    request_slide_completion(slide_config, IMAGE)
    mock_openai.__exit__.assert_called_once()

def test_client_is_closed_on_error(mock_openai, slide_config):
    mock_openai.chat.completions.create.side_effect = ConnectionResetError("reset")
    with pytest.raises(ConnectionResetError):
        request_slide_completion(slide_config, IMAGE)
    mock_openai.__exit__.assert_called_once()
