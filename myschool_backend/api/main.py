# myschool_backend/api/main.py

# ============================================================
# 1. LOAD ENV VARS FIRST
# ============================================================
from dotenv import load_dotenv
load_dotenv()  # <-- REQUIRED BEFORE ANY BACKEND IMPORTS

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from myschool_backend.search.knowledge_base import (
    KnowledgeBaseError,
    get_knowledge_base,
)
from myschool_backend.secrets.net_keys import (
    get_active_net_provider,
    has_net_api_key,
)

# ============================================================
# IMPORT API ROUTERS
# ============================================================

from myschool_backend.api.chat import router as chat_router
from myschool_backend.api.search import router as search_router


# ============================================================
# FASTAPI APPLICATION
# ============================================================

app = FastAPI(
    title="MySchool Assistant API",
    description=(
        "Chat query router for portal.myschoolct.com\n\n"
        "- Priority search over the portal taxonomy\n"
        "- Spelling correction, synonyms, class/subject extraction\n"
        "- Net (Groq) intent + translation\n"
    ),
    version="1.0.0",
)


# ============================================================
# 🚦 STARTUP EVENT (KNOWLEDGE BASE)
# ============================================================

@app.on_event("startup")
async def startup_event():
    # A broken taxonomy is fatal: refuse to serve
    try:
        kb = get_knowledge_base()
    except KnowledgeBaseError as e:
        print(f"❌ [STARTUP] Knowledge base failed to load: {e}")
        raise

    print(f"🚦 [STARTUP] Knowledge base ready ({kb.base_url})")

    try:
        provider = get_active_net_provider()
        if not has_net_api_key(provider):
            print(f"[STARTUP] No {provider} API key: classifier/translator will fall back")
    except RuntimeError as e:
        print(f"[STARTUP] Net provider misconfigured: {e}")


# ============================================================
# CORS CONFIGURATION
# ============================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],          # Dev only
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================
# ROUTER REGISTRATION
# ============================================================

app.include_router(chat_router)                 # POST /chat, GET /chat/autocomplete
app.include_router(search_router)               # POST /search/*


# ============================================================
# BASIC INFO ENDPOINT
# ============================================================

@app.get("/", tags=["Health"])
def root_info():
    return {
        "status": "ok",
        "service": "MySchool Assistant",
        "features": [
            "Seven-tier priority search",
            "Spelling correction (dictionary + edit distance + phonetic)",
            "Synonym expansion",
            "Class / subject extraction",
            "Net intent classification (Groq)",
            "Indian-language translation (Groq)",
            "Portal thumbnails",
        ],
    }


# ============================================================
# HEALTH CHECK ENDPOINT
# ============================================================

@app.get("/health", tags=["Health"])
def health_check():

    status = {
        "status": "ok",
        "services": {
            "knowledge_base": "unknown",
            "net_key": "unknown",
        }
    }

    try:
        get_knowledge_base()
        status["services"]["knowledge_base"] = "ok"
    except KnowledgeBaseError as e:
        status["services"]["knowledge_base"] = f"error: {e}"
        status["status"] = "degraded"

    try:
        provider = get_active_net_provider()
        status["services"]["net_key"] = (
            "configured" if has_net_api_key(provider) else "missing"
        )
    except RuntimeError as e:
        status["services"]["net_key"] = f"error: {e}"

    return status
