"""Tests for error handling middleware."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from itamae_provisioner.middleware import ErrorHandlingMiddleware


@pytest.fixture
def mock_context() -> MagicMock:
    """Create a mock middleware context."""
    context = MagicMock()
    context.method = "tools/call"
    context.message = MagicMock()
    context.message.name = "provision"
    return context


@pytest.mark.asyncio
async def test_passes_through_success(mock_context: MagicMock) -> None:
    """Successful requests are returned unchanged."""
    middleware = ErrorHandlingMiddleware()
    call_next = AsyncMock(return_value="success")

    assert await middleware.on_message(mock_context, call_next) == "success"


@pytest.mark.asyncio
async def test_logs_and_reraises(mock_context: MagicMock) -> None:
    """Errors are logged with their type and re-raised."""
    mock_logger = MagicMock()
    middleware = ErrorHandlingMiddleware(logger=mock_logger, include_traceback=True)
    call_next = AsyncMock(side_effect=ValueError("bad config"))

    with pytest.raises(ValueError, match="bad config"):
        await middleware.on_message(mock_context, call_next)

    mock_logger.error.assert_called_once()
    args = mock_logger.error.call_args.args
    assert args[1:4] == ("tools/call", "ValueError", "bad config")
    assert "Traceback" in args[4]



@pytest.mark.asyncio
async def test_logs_without_traceback_by_default(mock_context: MagicMock) -> None:
    """Without include_traceback only the summary line is logged."""
    mock_logger = MagicMock()
    middleware = ErrorHandlingMiddleware(logger=mock_logger)

    with pytest.raises(RuntimeError):
        await middleware.on_message(
            mock_context, AsyncMock(side_effect=RuntimeError("exit status 1"))
        )

    mock_logger.error.assert_called_once_with(
        "Error in %s: %s: %s", "tools/call", "RuntimeError", "exit status 1"
    )
