# myschool_backend/secrets/net_keys.py

"""
Net API key management (backend-only).

Security model:
- Keys are NEVER sent to the frontend or logged
- Keys come from the environment only (GROQ_API_KEY)
- Provider selection is explicit (MYSCHOOL_NET_PROVIDER)
"""

import os
from typing import Dict, Literal

# ============================================================
# TYPES
# ============================================================

NetProvider = Literal["groq"]

# ============================================================
# ENV VARS
# ============================================================

NET_PROVIDER_ENV = "MYSCHOOL_NET_PROVIDER"

KEY_ENV_VARS: Dict[str, str] = {
    "groq": "GROQ_API_KEY",
}

DEFAULT_PROVIDER: NetProvider = "groq"

# ============================================================
# PUBLIC API
# ============================================================

def has_net_api_key(provider: NetProvider) -> bool:
    env_var = KEY_ENV_VARS.get(provider)
    return bool(env_var and os.getenv(env_var, "").strip())


def get_net_api_key(provider: NetProvider) -> str:
    env_var = KEY_ENV_VARS.get(provider)
    key = os.getenv(env_var, "").strip() if env_var else ""

    if not key:
        raise RuntimeError(f"No API key for provider '{provider}'")

    return key


def get_active_net_provider() -> NetProvider:
    provider = os.getenv(NET_PROVIDER_ENV, DEFAULT_PROVIDER).strip().lower()

    if provider in KEY_ENV_VARS:
        return provider  # type: ignore

    raise RuntimeError(
        f"Invalid Net provider '{provider}'. Available: {list(KEY_ENV_VARS)}"
    )
