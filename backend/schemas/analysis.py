from pydantic import BaseModel
from typing import Any, Optional, Union


class DocumentContext(BaseModel):
    type: str = "Unknown"
    subject: str = "Unknown"
    level: str = "Unknown"
    wordCount: Optional[int] = None
    keyTopics: list[str] = []


class ContentBreakdown(BaseModel):
    mainPoints: list[str] = []
    # Models sometimes return {"term", "definition"} objects instead of strings
    definitions: list[Union[str, dict[str, Any]]] = []
    examples: list[str] = []
    references: list[str] = []


class WritingGuide(BaseModel):
    suggestedPoints: list[str] = []
    relevantSources: list[str] = []
    keyQuotes: list[str] = []
    possibleArguments: list[str] = []


class Summary(BaseModel):
    overview: str = "No overview available"
    keyPoints: list[str] = []
    conclusionPoints: list[str] = []


class PageAnalysis(BaseModel):
    pageNumber: int
    content: str = ""
    keyPoints: list[str] = []
    usefulContent: list[str] = []
    topics: list[str] = []
    arguments: list[str] = []
    evidence: list[str] = []
    connections: list[str] = []
    importance: str = ""


class DocumentAnalysis(BaseModel):
    documentContext: DocumentContext = DocumentContext()
    contentBreakdown: ContentBreakdown = ContentBreakdown()
    writingGuide: WritingGuide = WritingGuide()
    summary: Summary = Summary()
    pageAnalysis: list[PageAnalysis] = []


class FileAnalysisResult(BaseModel):
    documentType: str
    fileName: str
    totalPages: int
    analysis: DocumentAnalysis
    id: Optional[str] = None


class FileAnalysisInput(BaseModel):
    fileName: str
    fileSize: Optional[int] = None
    analysis: dict


class AnsweredQuestion(BaseModel):
    question: str
    answer: str
    pageNumber: int
