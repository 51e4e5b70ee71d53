from typing import Optional

from pydantic import BaseModel, ConfigDict


class PostId(BaseModel):
    id: str


class PostSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    date: str
    description: Optional[str] = None
    micro: bool = False
    hidden: bool = False


class PostDetail(PostSummary):
    contentHtml: str
    readTime: int
    tableOfContents: str
