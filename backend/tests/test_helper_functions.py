import asyncio
from unittest.mock import AsyncMock, Mock, patch

import pytest

from peggedsupply.errors import InvalidAmountError
from peggedsupply.misc.helper_functions import humanize_number, retry_call, send_discord_message, to_float_amount


def test_to_float_amount():
    assert to_float_amount(1_500_000, 6) == 1.5
    assert to_float_amount("2000000000000000000", 18) == 2.0
    assert to_float_amount(0, 0) == 0


@pytest.mark.parametrize("raw, decimals", [
    (1.5, 18),
    ("12abc", 18),
    (True, 18),
    (100, -1),
    (100, 78),
    (100, "18"),
])
def test_to_float_amount_rejects_invalid_input(raw, decimals):
    with pytest.raises(InvalidAmountError):
        to_float_amount(raw, decimals)


def test_humanize_number():
    assert humanize_number(1_234_000_000) == "1.23 B"
    assert humanize_number(950) == "950.00"
    assert humanize_number(-2_000_000) == "-2.00 M"
    assert humanize_number(None) == "-"


@pytest.mark.asyncio
async def test_retry_call_retries_rate_limits():
    func = AsyncMock(side_effect=[Exception("429 Too Many Requests"), 42])
    with patch("peggedsupply.misc.helper_functions.asyncio.sleep", new=AsyncMock()) as sleep:
        assert await retry_call(func, "a", max_retries=3) == 42
    assert func.await_count == 2
    sleep.assert_awaited_once()


@pytest.mark.asyncio
async def test_retry_call_raises_contract_errors_immediately():
    func = AsyncMock(side_effect=Exception("execution reverted"))
    with pytest.raises(Exception, match="execution reverted"):
        await retry_call(func)
    assert func.await_count == 1


@pytest.mark.asyncio
async def test_retry_call_gives_up_after_max_retries():
    func = AsyncMock(side_effect=asyncio.TimeoutError())
    with patch("peggedsupply.misc.helper_functions.asyncio.sleep", new=AsyncMock()):
        with pytest.raises(asyncio.TimeoutError):
            await retry_call(func, max_retries=3)
    assert func.await_count == 3


def test_send_discord_message_without_webhook(monkeypatch):
    monkeypatch.delenv("DISCORD_COMMS", raising=False)
    with patch("peggedsupply.misc.helper_functions.requests.post") as post:
        send_discord_message("hello")
    post.assert_not_called()


def test_send_discord_message_posts_content():
    with patch("peggedsupply.misc.helper_functions.requests.post", return_value=Mock(status_code=204)) as post:
        send_discord_message("hello", "https://discord.example/webhook")
    post.assert_called_once_with("https://discord.example/webhook", json={"content": "hello"}, timeout=10)
