# File: api/models/content_models.py
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class ArticleData(BaseModel):
    """Client-side copy of a cached article, used to materialize it on save."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: Optional[str] = None
    body: Optional[str] = None
    url: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    source: Optional[str] = None
    author: Optional[str] = None
    category: Optional[str] = None
    published_at: Optional[str] = Field(default=None, alias="publishedAt")


class SaveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content_id: str = Field(alias="contentId", min_length=1)
    article: Optional[ArticleData] = None


class LikeResponse(BaseModel):
    likes: int
    liked: bool


class CommentRequest(BaseModel):
    text: str = Field(min_length=1, max_length=1000)


class CollectionCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    contents: List[int] = Field(default_factory=list)


class CollectionUpdateRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    contents: Optional[List[int]] = None


class AdminContentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["news", "journal", "book"]
    title: str = Field(min_length=1)
    author: Optional[str] = None
    source: Optional[str] = None
    url: str = ""
    description: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class ReadingPreferencesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    categories: Optional[List[str]] = None
    sources: Optional[List[str]] = None
    reading_time: Optional[str] = Field(default=None, alias="readingTime")


class TopicsRequest(BaseModel):
    title: str
    description: Optional[str] = None


class SummarizeRequest(BaseModel):
    text: str = ""


class TranslateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    target_lang: str = Field(alias="targetLang")


class PageResponse(BaseModel):
    items: List[Dict[str, Any]]
    current_page: int
    total_pages: int
    total: int
