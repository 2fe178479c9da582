# myschool_backend/search/knowledge_base.py

"""
Portal Knowledge Base (taxonomy)

Responsibilities:
- Load the portal taxonomy JSON ONCE
- Validate it completely before anything uses it
- Expose read-only lookups for the search pipeline

Rules:
- A broken or partial taxonomy is FATAL (KnowledgeBaseError)
- Models are frozen; nothing mutates the taxonomy after load
- Path comes from MYSCHOOL_KB_PATH, falling back to the packaged file
"""

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


# ============================================================
# CONFIG
# ============================================================

KB_PATH_ENV = "MYSCHOOL_KB_PATH"

DEFAULT_KB_PATH = (
    Path(__file__).resolve().parent.parent / "data" / "knowledge_base.json"
)

ACADEMIC_SECTION = "academic"


# ============================================================
# ERRORS
# ============================================================

class KnowledgeBaseError(Exception):
    pass


# ============================================================
# SCHEMA
# ============================================================

class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


def _clean_keywords(values) -> Tuple[str, ...]:
    if isinstance(values, str):
        values = [values]
    cleaned = tuple(
        v.strip().lower()
        for v in (values or [])
        if isinstance(v, str) and v.strip()
    )
    if not cleaned:
        raise ValueError("keyword list cannot be empty")
    return cleaned


class Subject(_Frozen):
    code: str = Field(..., min_length=1)
    keywords: Tuple[str, ...]

    @field_validator("keywords", mode="before")
    @classmethod
    def normalize_keywords(cls, v):
        return _clean_keywords(v)


class OneClickResource(_Frozen):
    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    keywords: Tuple[str, ...]
    description: Optional[str] = None

    @field_validator("keywords", mode="before")
    @classmethod
    def normalize_keywords(cls, v):
        return _clean_keywords(v)


class Grades(_Frozen):
    description: str = ""
    subjects: Dict[str, Subject]

    @field_validator("subjects")
    @classmethod
    def require_subjects(cls, v):
        if not v:
            raise ValueError("subjects table cannot be empty")
        return v


class OneClickResources(_Frozen):
    description: str = ""
    resources: Tuple[OneClickResource, ...]

    @field_validator("resources")
    @classmethod
    def require_resources(cls, v):
        if not v:
            raise ValueError("one click resource list cannot be empty")
        return v


class AcademicSubsections(_Frozen):
    grades: Grades
    one_click_resources: OneClickResources


class Section(_Frozen):
    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    description: str = ""
    keywords: Tuple[str, ...]
    subsections: Optional[AcademicSubsections] = None

    @field_validator("keywords", mode="before")
    @classmethod
    def normalize_keywords(cls, v):
        return _clean_keywords(v)


class ImageCategory(_Frozen):
    name: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1)
    mu: int = Field(0, ge=0)
    keywords: Tuple[str, ...]

    @field_validator("keywords", mode="before")
    @classmethod
    def normalize_keywords(cls, v):
        return _clean_keywords(v)


class ImageBank(_Frozen):
    categories: Dict[str, ImageCategory]


class PortalPaths(_Frozen):
    search: str = "/views/sections/result?text={query}"
    browse: str = "/views/academic"
    class_landing: str = "/views/academic/class/class-{class_num}"
    class_subject: str = "/views/academic/class/class-{class_num}?main=1&mu={code}"
    image_bank: str = "{path}?main=2&mu={mu}"


class KnowledgeBase(_Frozen):
    base_url: str = Field(..., min_length=1)
    paths: PortalPaths = PortalPaths()
    sections: Dict[str, Section]
    image_bank: ImageBank

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("sections")
    @classmethod
    def require_academic(cls, v):
        academic = v.get(ACADEMIC_SECTION)
        if academic is None or academic.subsections is None:
            raise ValueError(
                "sections.academic.subsections (grades + one_click_resources) is required"
            )
        return v

    # --------------------------------------------------------
    # LOOKUPS
    # --------------------------------------------------------

    @property
    def subjects(self) -> Dict[str, Subject]:
        return self.sections[ACADEMIC_SECTION].subsections.grades.subjects

    @property
    def one_click_resources(self) -> Tuple[OneClickResource, ...]:
        return self.sections[ACADEMIC_SECTION].subsections.one_click_resources.resources

    def non_academic_sections(self) -> List[Tuple[str, Section]]:
        return [
            (key, section)
            for key, section in self.sections.items()
            if key != ACADEMIC_SECTION
        ]

    def url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        if not path.startswith("/"):
            path = "/" + path
        return self.base_url + path

    def vocabulary(self) -> FrozenSet[str]:
        """
        Every single word the taxonomy knows about.
        Used by the spelling corrector as "already correct" words.
        """
        words = set()

        def add(phrases):
            for phrase in phrases:
                words.update(phrase.split())

        for name, subject in self.subjects.items():
            words.add(name)
            add(subject.keywords)
        for resource in self.one_click_resources:
            add(resource.keywords)
        for _, section in self.non_academic_sections():
            add(section.keywords)
        for category in self.image_bank.categories.values():
            add(category.keywords)

        return frozenset(w for w in words if w.isalpha())


# ============================================================
# LOADING
# ============================================================

def load_knowledge_base(path: Optional[os.PathLike] = None) -> KnowledgeBase:
    """
    Load + validate a knowledge base file.
    Raises KnowledgeBaseError on ANY problem.
    """
    kb_path = Path(path or os.getenv(KB_PATH_ENV) or DEFAULT_KB_PATH)

    if not kb_path.exists():
        raise KnowledgeBaseError(f"Knowledge base not found: {kb_path}")

    try:
        data = json.loads(kb_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise KnowledgeBaseError(f"Unreadable knowledge base {kb_path}: {e}") from e

    return parse_knowledge_base(data, source=str(kb_path))


def parse_knowledge_base(data: dict, source: str = "<memory>") -> KnowledgeBase:
    if not isinstance(data, dict):
        raise KnowledgeBaseError(f"Knowledge base {source} must be a JSON object")

    try:
        kb = KnowledgeBase.model_validate(data)
    except ValidationError as e:
        raise KnowledgeBaseError(f"Invalid knowledge base {source}: {e}") from e

    print(
        f"📚 [KB] Loaded {source} | subjects={len(kb.subjects)} | "
        f"one_click={len(kb.one_click_resources)} | "
        f"image_categories={len(kb.image_bank.categories)}"
    )
    return kb


@lru_cache(maxsize=1)
def get_knowledge_base() -> KnowledgeBase:
    return load_knowledge_base()
