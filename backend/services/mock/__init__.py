from services.mock.analysis import mock_assessment_analysis, mock_page_analysis, mock_document_analysis
from services.mock.assistant import mock_proofread, mock_chat_reply, mock_article, mock_answer

__all__ = [
    "mock_assessment_analysis",
    "mock_page_analysis",
    "mock_document_analysis",
    "mock_proofread",
    "mock_chat_reply",
    "mock_article",
    "mock_answer",
]
