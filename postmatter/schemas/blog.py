from typing import List, Optional

from pydantic import BaseModel, Field

from postmatter.schemas.post import Diagnostic, FrontMatterMode


class PostSummary(BaseModel):
    slug: str
    title: str
    date: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    readingTime: Optional[str] = None
    draft: bool = False


class PostDetail(PostSummary):
    content: str


class PostDiagnostics(BaseModel):
    slug: str
    mode: FrontMatterMode
    diagnostics: List[Diagnostic] = Field(default_factory=list)


class LoadFailureOut(BaseModel):
    path: str
    error: str


class DiagnosticsReport(BaseModel):
    posts: List[PostDiagnostics] = Field(default_factory=list)
    failures: List[LoadFailureOut] = Field(default_factory=list)
