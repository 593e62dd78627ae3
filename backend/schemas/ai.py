from pydantic import BaseModel, Field
from typing import Literal, Optional

from schemas.common import CamelModel
from schemas.analysis import DocumentAnalysis


class AnalyzeInput(CamelModel):
    image_url: Optional[str] = None
    page_number: int = 1
    total_pages: int = 1


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatAnalyses(BaseModel):
    context: Optional[DocumentAnalysis] = None
    questions: Optional[DocumentAnalysis] = None


class ChatInput(CamelModel):
    messages: list[ChatMessage] = []
    file_content: Optional[str] = None
    analysis_mode: Optional[str] = None
    system_message: Optional[str] = None
    active_document: Optional[Literal["context", "questions"]] = None
    analyses: Optional[ChatAnalyses] = None


class ArticleInput(BaseModel):
    topic: str
    style: str = "informative"
    length: int = Field(default=800, gt=0)
