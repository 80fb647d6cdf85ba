"""Unit tests for confluence_client.retry_logic module."""

import pytest
from unittest.mock import patch, MagicMock

from src.confluence_client.retry_logic import retry_on_rate_limit, _is_rate_limit_error
from src.confluence_client.errors import APIAccessError


def rate_limit_error():
    error = Exception("API error")
    error.status_code = 429
    return error


class TestIsRateLimitError:
    """Test cases for _is_rate_limit_error function."""

    def test_detects_429_in_message(self):
        """_is_rate_limit_error should detect '429' in exception message."""
        assert _is_rate_limit_error(Exception("HTTP 429 Too Many Requests")) is True

    def test_detects_rate_limit_text_in_message(self):
        """_is_rate_limit_error should detect 'rate limit' in exception message."""
        assert _is_rate_limit_error(Exception("Rate limit exceeded")) is True

    def test_detects_status_code_attribute(self):
        """_is_rate_limit_error should detect status_code=429 attribute."""
        assert _is_rate_limit_error(rate_limit_error()) is True

    def test_detects_response_status_code_attribute(self):
        """_is_rate_limit_error should detect response.status_code=429 attribute."""
        error = Exception("API error")
        error.response = MagicMock()
        error.response.status_code = 429
        assert _is_rate_limit_error(error) is True

    def test_returns_false_for_other_errors(self):
        """_is_rate_limit_error should return False for non-rate-limit errors."""
        error = Exception("Not found")
        error.status_code = 404
        assert _is_rate_limit_error(error) is False


class TestRetryOnRateLimit:
    """Test cases for retry_on_rate_limit function."""

    def test_success_on_first_attempt(self):
        """retry_on_rate_limit should return result on first successful attempt."""
        mock_func = MagicMock(return_value="success")

        result = retry_on_rate_limit(mock_func, "arg1", kwarg1="value1")

        assert result == "success"
        mock_func.assert_called_once_with("arg1", kwarg1="value1")

    @patch('src.confluence_client.retry_logic.time.sleep')
    def test_retries_with_exponential_backoff(self, mock_sleep):
        """Waits double between attempts: 1s, 2s."""
        mock_func = MagicMock(side_effect=[rate_limit_error(), rate_limit_error(), "ok"])

        result = retry_on_rate_limit(mock_func)

        assert result == "ok"
        assert mock_func.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 2]

    @patch('src.confluence_client.retry_logic.time.sleep')
    def test_gives_up_after_max_retries(self, mock_sleep):
        """Persistent 429s raise APIAccessError after max_retries retries."""
        mock_func = MagicMock(side_effect=rate_limit_error())

        with pytest.raises(APIAccessError) as exc_info:
            retry_on_rate_limit(mock_func, max_retries=3)

        assert mock_func.call_count == 4
        assert exc_info.value.status_code == 429
        assert "after 3 retries" in str(exc_info.value)
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1, 2, 4]

    @patch('src.confluence_client.retry_logic.time.sleep')
    def test_zero_retries(self, mock_sleep):
        """max_retries=0 fails on the first 429."""
        mock_func = MagicMock(side_effect=rate_limit_error())

        with pytest.raises(APIAccessError):
            retry_on_rate_limit(mock_func, max_retries=0)

        mock_func.assert_called_once()
        mock_sleep.assert_not_called()

    @patch('src.confluence_client.retry_logic.time.sleep')
    def test_other_errors_are_not_retried(self, mock_sleep):
        """Non-429 errors propagate immediately."""
        mock_func = MagicMock(side_effect=ValueError("bad"))

        with pytest.raises(ValueError):
            retry_on_rate_limit(mock_func)

        mock_func.assert_called_once()
        mock_sleep.assert_not_called()
