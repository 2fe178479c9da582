# myschool_backend/llm/net_models.py

"""
Registry for external (Net) LLMs used by the assistant.

Rules:
- No API calls here
- No secrets here
- One model per task, per provider
"""

from typing import Dict, Literal

from myschool_backend.secrets.net_keys import NetProvider

# ============================================================
# TYPES
# ============================================================

NetTask = Literal["intent", "translate"]

# ============================================================
# NET MODEL REGISTRY
# ============================================================

NET_MODELS: Dict[str, Dict[str, str]] = {
    "groq": {
        "intent": "llama-3.1-8b-instant",
        "translate": "llama-3.3-70b-versatile",
    },
}

NET_ENDPOINTS: Dict[str, str] = {
    "groq": "https://api.groq.com/openai/v1/chat/completions",
}

# ============================================================
# HARD LIMITS
# ============================================================

NET_MAX_TOKENS = 1024
NET_MAX_REQUESTS_PER_MIN = 30
NET_TIMEOUT_SECONDS = 20

# ============================================================
# MODEL RESOLUTION
# ============================================================

def get_net_model(provider: NetProvider, task: NetTask) -> str:
    if provider not in NET_MODELS:
        raise ValueError(f"Unknown Net provider '{provider}'")

    models = NET_MODELS[provider]

    if task not in models:
        raise ValueError(f"Invalid task '{task}' for provider '{provider}'")

    return models[task]


def get_net_endpoint(provider: NetProvider) -> str:
    if provider not in NET_ENDPOINTS:
        raise ValueError(f"Unknown Net provider '{provider}'")
    return NET_ENDPOINTS[provider]