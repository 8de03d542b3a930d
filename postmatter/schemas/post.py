from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class FieldStatus(str, Enum):
    OK = "ok"
    MISSING = "missing"
    MALFORMED = "malformed"


class FieldResult(BaseModel):
    """Outcome of decoding one front-matter key.

    ``raw`` keeps the source text when the value could not be decoded, so callers
    can decide per field how to degrade.
    """

    status: FieldStatus = FieldStatus.MISSING
    value: Any = None
    raw: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == FieldStatus.OK


class FrontMatterMode(str, Enum):
    DELIMITED = "delimited"
    BARE = "bare"
    UNTERMINATED = "unterminated"
    NONE = "none"


class FrontMatter(BaseModel):
    title: FieldResult = Field(default_factory=FieldResult)
    date: FieldResult = Field(default_factory=FieldResult)
    draft: FieldResult = Field(default_factory=FieldResult)
    tags: FieldResult = Field(default_factory=FieldResult)
    extra: Dict[str, Any] = Field(default_factory=dict)


class Diagnostic(BaseModel):
    field: Optional[str] = None
    message: str


class Post(BaseModel):
    title: str = ""
    date: Optional[str] = None
    draft: bool = False
    tags: List[str] = Field(default_factory=list)
    body: str = ""


class ParsedPost(BaseModel):
    post: Post
    front_matter: FrontMatter = Field(default_factory=FrontMatter)
    mode: FrontMatterMode = FrontMatterMode.NONE
    front_matter_text: str = ""  # removed prefix, delimiters included
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    @property
    def source(self) -> str:
        """The exact text the post was parsed from."""
        return self.front_matter_text + self.post.body
