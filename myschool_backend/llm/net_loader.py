"""
net_loader.py

External LLM client for the MySchool assistant.

GUARANTEES:
- JSON-mode chat completions only (classifier / translator)
- Returns a parsed dict or raises a typed Net*Error
- Explicit timeouts, no retries (retry policy belongs to the caller)
- Process-wide RPM accounting
"""

import json
import time
import threading
from typing import Dict, List, Optional

import requests

from myschool_backend.llm.net_models import (
    NET_MAX_REQUESTS_PER_MIN,
    NET_MAX_TOKENS,
    NET_TIMEOUT_SECONDS,
    NetTask,
    get_net_endpoint,
    get_net_model,
)
from myschool_backend.secrets.net_keys import get_active_net_provider, get_net_api_key


# ============================================================
# GLOBAL STATE (RATE)
# ============================================================

_request_timestamps: List[float] = []
_lock = threading.Lock()


# ============================================================
# ERRORS
# ============================================================

class NetUsageError(Exception):
    pass


class NetAuthError(Exception):
    pass


class NetRateLimitError(Exception):
    pass


class NetProviderError(Exception):
    pass


# ============================================================
# LIMIT ENFORCEMENT
# ============================================================

def _acquire_request_slot() -> None:
    now = time.time()

    with _lock:
        one_min_ago = now - 60
        while _request_timestamps and _request_timestamps[0] < one_min_ago:
            _request_timestamps.pop(0)

        if len(_request_timestamps) >= NET_MAX_REQUESTS_PER_MIN:
            raise NetRateLimitError("Net RPM limit exceeded")

        _request_timestamps.append(now)


def reset_rate_limit() -> None:
    with _lock:
        _request_timestamps.clear()


# ============================================================
# RESPONSE PARSING
# ============================================================

def _extract_json_content(body: dict) -> Dict:
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise NetProviderError(f"Malformed completion payload: {e}") from e

    if not isinstance(content, str) or not content.strip():
        raise NetProviderError("Empty completion content")

    try:
        parsed = json.loads(content)
    except ValueError as e:
        raise NetProviderError(f"Completion is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise NetProviderError("Completion JSON is not an object")

    return parsed


# ============================================================
# PUBLIC ENTRY POINT
# ============================================================

def chat_completion_json(
    messages: List[Dict[str, str]],
    task: NetTask,
    *,
    provider: Optional[str] = None,
    max_tokens: int = 300,
    temperature: float = 0.3,
    timeout: float = NET_TIMEOUT_SECONDS,
) -> Dict:
    """
    One blocking JSON-mode completion.

    Raises:
    - NetUsageError      bad call (no messages)
    - NetAuthError       missing / rejected key
    - NetRateLimitError  local RPM guard or provider 429
    - NetProviderError   transport error, HTTP error, bad payload
    """

    if not messages:
        raise NetUsageError("Messages cannot be empty")

    provider = provider or get_active_net_provider()
    model_id = get_net_model(provider, task)
    url = get_net_endpoint(provider)
    max_tokens = min(max_tokens, NET_MAX_TOKENS)

    try:
        api_key = get_net_api_key(provider)
    except RuntimeError as e:
        raise NetAuthError(str(e)) from e

    _acquire_request_slot()

    payload = {
        "model": model_id,
        "messages": messages,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "response_format": {"type": "json_object"},
    }

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    start = time.time()

    try:
        response = requests.post(
            url,
            headers=headers,
            json=payload,
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise NetProviderError(f"{provider} request failed: {e}") from e
    finally:
        elapsed = round(time.time() - start, 2)
        print(f"🌐 [NET] provider={provider} | model={model_id} | task={task} | {elapsed}s")

    if response.status_code == 401:
        raise NetAuthError(f"Invalid {provider} API key")

    if response.status_code == 429:
        raise NetRateLimitError(f"{provider} quota exceeded")

    if response.status_code >= 400:
        raise NetProviderError(
            f"{provider} API error [{response.status_code}]: {response.text[:300]}"
        )

    try:
        body = response.json()
    except ValueError as e:
        raise NetProviderError(f"{provider} returned non-JSON body") from e

    return _extract_json_content(body)
