import asyncio
import logging
import math
import os
import random

import aiohttp
import requests

from peggedsupply.errors import InvalidAmountError

logger = logging.getLogger("pegged_supply")

MAX_DECIMALS = 77  # 10**77 is the largest power of ten fitting into uint256


## ----------------- Adapter lifecycle prints --------------------

def print_init(name, adapter_params):
    print(f'Adapter {name} initialized with {adapter_params}.')

def print_extract(name, load_params, shape):
    print(f'Extracted {name} with {load_params}. Shape: {shape}')

def print_load(name, upserted, tbl_name):
    print(f'Loaded {name}: {upserted} rows upserted into {tbl_name}.')


## ----------------- Alerts --------------------

def send_discord_message(message, webhook_url=None):
    data = {"content": message}
    if webhook_url is None:
        webhook_url = os.getenv('DISCORD_COMMS')
    if not webhook_url:
        print("No discord webhook configured, skipping message")
        return
    try:
        response = requests.post(webhook_url, json=data, timeout=10)
        # Check the response status code
        if response.status_code == 204:
            print("Message sent successfully")
        else:
            print(f"Error sending message: {response.status_code} - {response.text}")
    except requests.exceptions.RequestException as e:
        print(f"Error sending Discord message: {e}")


## ----------------- Numbers --------------------

def to_float_amount(raw, decimals) -> float:
    """
    Convert a fixed point integer (as returned by totalSupply/balanceOf) into a float amount.

    Accepts ints and decimal digit strings, anything else is a contract violation.
    """
    if isinstance(decimals, bool) or not isinstance(decimals, int) or not 0 <= decimals <= MAX_DECIMALS:
        raise InvalidAmountError(f"Invalid decimals: {decimals!r}")
    if isinstance(raw, str):
        raw_str = raw.strip()
        if not raw_str.lstrip("-").isdigit():
            raise InvalidAmountError(f"Raw amount is not an integer string: {raw!r}")
        raw = int(raw_str)
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise InvalidAmountError(f"Raw amount must be an integer, got {type(raw).__name__}: {raw!r}")
    amount = raw / (10 ** decimals)
    if not math.isfinite(amount):
        raise InvalidAmountError(f"Raw amount {raw} with {decimals} decimals is not finite")
    return amount

def humanize_number(value) -> str:
    if value is None:
        return "-"
    sign = "-" if value < 0 else ""
    value = abs(value)
    for threshold, suffix in ((1e12, "T"), (1e9, "B"), (1e6, "M"), (1e3, "k")):
        if value >= threshold:
            return f"{sign}{value / threshold:.2f} {suffix}"
    return f"{sign}{value:.2f}"


## ----------------- Retries & HTTP --------------------

def _is_rate_limit(error_str: str) -> bool:
    return "429" in error_str or "too many requests" in error_str or "rate limit" in error_str

def _is_network_error(error_str: str) -> bool:
    return "connection" in error_str or "timeout" in error_str or "network" in error_str

def _is_contract_error(error_str: str) -> bool:
    return "execution reverted" in error_str or "could not decode contract function call" in error_str

async def retry_call(func, *args, max_retries=5, initial_wait=1.0, **kwargs):
    """
    Await func(*args, **kwargs), retrying rate limits and network errors with exponential backoff.
    Contract execution errors and anything else are raised immediately.
    """
    retries = 0
    while True:
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            error_str = str(e).lower()
            if _is_contract_error(error_str):
                raise
            transient = isinstance(e, (asyncio.TimeoutError, aiohttp.ClientConnectionError))
            if not (transient or _is_rate_limit(error_str) or _is_network_error(error_str)):
                raise

            retries += 1
            if retries >= max_retries:
                logger.error(f"Max retries ({max_retries}) reached for rate limiting/network errors: {e}")
                raise

            # Exponential backoff with jitter
            wait_time = min((2 ** retries) * initial_wait + random.uniform(0, 1), 60)
            logger.warning(f"Rate limit/network error detected. Retrying ({retries}/{max_retries}) in {wait_time:.2f} seconds...")
            await asyncio.sleep(wait_time)

async def api_get_call(url, session: aiohttp.ClientSession = None, max_retries=3, timeout=30):
    """GET a json payload, retrying transient failures. Raises on non-200 answers."""
    async def _get(client):
        async with client.get(url, timeout=aiohttp.ClientTimeout(total=timeout)) as response:
            if response.status == 429:
                raise aiohttp.ClientError(f"429 Too Many Requests for {url}")
            if response.status != 200:
                raise RuntimeError(f"GET {url} failed with HTTP {response.status}")
            return await response.json(content_type=None)

    if session is not None:
        return await retry_call(_get, session, max_retries=max_retries)
    async with aiohttp.ClientSession() as client:
        return await retry_call(_get, client, max_retries=max_retries)

async def api_post_call(url, payload, session: aiohttp.ClientSession = None, max_retries=3, timeout=30):
    async def _post(client):
        async with client.post(url, json=payload, timeout=aiohttp.ClientTimeout(total=timeout)) as response:
            if response.status == 429:
                raise aiohttp.ClientError(f"429 Too Many Requests for {url}")
            if response.status != 200:
                raise RuntimeError(f"POST {url} failed with HTTP {response.status}")
            return await response.json(content_type=None)

    if session is not None:
        return await retry_call(_post, session, max_retries=max_retries)
    async with aiohttp.ClientSession() as client:
        return await retry_call(_post, client, max_retries=max_retries)
