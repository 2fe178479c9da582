# myschool_backend/api/search.py

"""
Search API

Exposes the deterministic query pipeline directly:
- /search/resolve   ranked portal destinations
- /search/correct   spelling correction
- /search/expand    synonym expansion
- /search/extract   class / subject extraction

No network calls on any of these routes.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from myschool_backend.search.class_subject import extract_class_and_subject
from myschool_backend.search.confidence import describe_confidence
from myschool_backend.search.keywords import tokenize
from myschool_backend.search.priority_search import PrioritySearchEngine, get_engine
from myschool_backend.search.synonyms import expand_with_synonyms


router = APIRouter(prefix="/search", tags=["Search"])

MAX_RESOLVE_LIMIT = 10


# ============================================================
# REQUEST MODELS
# ============================================================

class QueryRequest(BaseModel):
    query: str


class ResolveRequest(QueryRequest):
    limit: int = Field(1, ge=1, le=MAX_RESOLVE_LIMIT)


# ============================================================
# ROUTES
# ============================================================

@router.post("/resolve")
def resolve_query(
    req: ResolveRequest,
    engine: PrioritySearchEngine = Depends(get_engine),
):
    results = engine.resolve(req.query, limit=req.limit)

    return {
        "query": req.query,
        "corrected_query": engine.prepare(req.query),
        "results": [
            {**r.to_dict(), **describe_confidence(r)}
            for r in results
        ],
    }


@router.post("/correct")
def correct_query(
    req: QueryRequest,
    engine: PrioritySearchEngine = Depends(get_engine),
):
    corrected = engine.prepare(req.query)
    return {
        "query": req.query,
        "corrected": corrected,
        "changed": corrected != " ".join(tokenize(req.query)),
    }


@router.post("/expand")
def expand_query(
    req: QueryRequest,
    engine: PrioritySearchEngine = Depends(get_engine),
):
    return {
        "query": req.query,
        "expansions": expand_with_synonyms(req.query, engine.lexicon),
    }


@router.post("/extract")
def extract_query(
    req: QueryRequest,
    engine: PrioritySearchEngine = Depends(get_engine),
):
    cs = extract_class_and_subject(req.query, engine.kb)
    return {
        "query": req.query,
        "class_num": cs.class_num,
        "subject": cs.subject,
        "last_token": cs.last_token,
    }
