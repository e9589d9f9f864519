from pydantic import AliasChoices, BaseModel, Field, field_validator
from typing import List, Literal, Optional
from datetime import datetime

from app.models.video import VIDEO_CATEGORIES

PostStatus = Literal["draft", "published"]


def _check_category(v: Optional[str]) -> Optional[str]:
    if v is not None and v not in VIDEO_CATEGORIES:
        raise ValueError(f"category must be one of: {', '.join(VIDEO_CATEGORIES)}")
    return v


class VideoCreate(BaseModel):
    youtube_url: str = Field(..., validation_alias=AliasChoices("youtubeUrl", "youtube_url"), min_length=1)
    title: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = None
    category: str = "Other"
    duration: Optional[int] = Field(None, ge=0)
    published_at: Optional[datetime] = Field(None, validation_alias=AliasChoices("publishedAt", "published_at"))

    @field_validator('category')
    def validate_category(cls, v):
        return _check_category(v)


class VideoUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = None
    category: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0)
    published_at: Optional[datetime] = Field(None, validation_alias=AliasChoices("publishedAt", "published_at"))

    @field_validator('category')
    def validate_category(cls, v):
        return _check_category(v)


class VideoOut(BaseModel):
    id: int
    title: str
    slug: str
    youtube_url: str
    youtube_id: str
    description: Optional[str]
    duration: Optional[int]
    category: str
    thumbnail_url: Optional[str]
    published_at: Optional[datetime]
    created_by: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {
        'from_attributes': True
    }


class BlogPostCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    content_markdown: str = Field("", validation_alias=AliasChoices("content", "content_markdown"))
    excerpt: Optional[str] = None
    status: PostStatus = "draft"


class BlogPostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    content_markdown: Optional[str] = Field(None, validation_alias=AliasChoices("content", "content_markdown"))
    excerpt: Optional[str] = None
    status: Optional[PostStatus] = None


class BlogPostOut(BaseModel):
    id: int
    title: str
    slug: str
    content_markdown: str
    content_html: Optional[str]
    excerpt: Optional[str]
    status: str
    published_at: Optional[datetime]
    author_id: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {
        'from_attributes': True
    }


class NewsItemCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    content_markdown: str = Field("", validation_alias=AliasChoices("content", "content_markdown"))
    source_url: Optional[str] = Field(None, validation_alias=AliasChoices("sourceUrl", "source_url"))
    source_name: Optional[str] = Field(None, max_length=200, validation_alias=AliasChoices("sourceName", "source_name"))
    status: PostStatus = "published"


class NewsItemUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    content_markdown: Optional[str] = Field(None, validation_alias=AliasChoices("content", "content_markdown"))
    source_url: Optional[str] = Field(None, validation_alias=AliasChoices("sourceUrl", "source_url"))
    source_name: Optional[str] = Field(None, max_length=200, validation_alias=AliasChoices("sourceName", "source_name"))
    status: Optional[PostStatus] = None


class NewsItemOut(BaseModel):
    id: int
    title: str
    slug: str
    content_markdown: str
    content_html: Optional[str]
    source_url: Optional[str]
    source_name: Optional[str]
    status: str
    published_at: Optional[datetime]
    created_by: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {
        'from_attributes': True
    }


class VideoList(BaseModel):
    videos: List[VideoOut]
    total: int
    page: int
    limit: int


class BlogPostList(BaseModel):
    posts: List[BlogPostOut]
    total: int
    page: int
    limit: int


class NewsItemList(BaseModel):
    news: List[NewsItemOut]
    total: int
    page: int
    limit: int
