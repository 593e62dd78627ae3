from schemas.common import CamelModel, SuccessResponse, StatusUpdate
from schemas.clients import ClientInput
from schemas.projects import ProjectInput
from schemas.tasks import TaskInput
from schemas.invoices import InvoiceInput, InvoiceStatusUpdate
from schemas.time_entries import TimeEntryInput, WeeklySummary
from schemas.dashboard import DashboardMetrics, DashboardAction
from schemas.resources import ResourceInput
from schemas.analysis import (
    DocumentContext, ContentBreakdown, WritingGuide, Summary, PageAnalysis,
    DocumentAnalysis, FileAnalysisResult, FileAnalysisInput, AnsweredQuestion
)
from schemas.ai import AnalyzeInput, ChatMessage, ChatAnalyses, ChatInput, ArticleInput
