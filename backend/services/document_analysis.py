"""Server-side PDF analysis.

A document goes through a straight line of steps: every page is rendered to a
PNG data URL, each page is analysed on its own by the vision model, then the
whole document is summarised once. If that summary cannot be parsed, the
per-page results are merged instead.
"""
import base64
import json
from typing import Optional

import fitz  # PyMuPDF
from fastapi import HTTPException

from config import MOCK_MODE, MODELS, MAX_PDF_PAGES, PDF_RENDER_ZOOM
from services.llm import create_completion, completion_text, extract_json_object
from services.mock import mock_page_analysis, mock_document_analysis
from prompts.file_analysis import (PAGE_ANALYSIS_PROMPT, DOCUMENT_ANALYSIS_PROMPT,
                                   PAGE_ANALYSIS_USER_MESSAGE, DOCUMENT_ANALYSIS_USER_MESSAGE)
from schemas.analysis import DocumentAnalysis

SECTION_LISTS = {
    "contentBreakdown": ("mainPoints", "definitions", "examples", "references"),
    "writingGuide": ("suggestedPoints", "relevantSources", "keyQuotes", "possibleArguments"),
    "summary": ("keyPoints", "conclusionPoints"),
}

PAGE_LISTS = ("keyPoints", "usefulContent", "topics", "arguments", "evidence", "connections")


def render_pdf_pages(pdf_bytes: bytes, zoom: float = PDF_RENDER_ZOOM, max_pages: int = MAX_PDF_PAGES) -> list[str]:
    """Render PDF pages to PNG data URLs"""
    pdf_doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    try:
        matrix = fitz.Matrix(zoom, zoom)
        image_urls = []
        for page_num in range(min(len(pdf_doc), max_pages)):
            pix = pdf_doc[page_num].get_pixmap(matrix=matrix)
            img_base64 = base64.b64encode(pix.tobytes("png")).decode("utf-8")
            image_urls.append(f"data:image/png;base64,{img_base64}")
        return image_urls
    finally:
        pdf_doc.close()


def vision_messages(system_prompt: str, user_text: str, image_url: str) -> list:
    return [
        {"role": "system", "content": system_prompt},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": user_text},
                {"type": "image_url", "image_url": {"url": image_url}}
            ]
        }
    ]


def empty_page_result(doc_type: str, overview: str) -> dict:
    return {
        "documentContext": {"type": doc_type, "subject": doc_type, "level": doc_type,
                            "wordCount": None, "keyTopics": []},
        "contentBreakdown": {"mainPoints": [], "definitions": [], "examples": [], "references": []},
        "writingGuide": {"suggestedPoints": [], "relevantSources": [], "keyQuotes": [], "possibleArguments": []},
        "summary": {"overview": overview, "keyPoints": [], "conclusionPoints": []},
        "pageAnalysis": {"pageNumber": 0, "content": "", "keyPoints": [], "usefulContent": [],
                         "topics": [], "arguments": [], "evidence": [], "connections": [], "importance": ""},
    }


def analyze_page(image_url: str, page_number: int, total_pages: int) -> dict:
    """Analyse one page image. Never raises for model trouble; the page gets a placeholder instead."""
    if MOCK_MODE:
        return mock_page_analysis(page_number, total_pages)

    prompt = PAGE_ANALYSIS_PROMPT.replace("<<PAGE_NUMBER>>", str(page_number))
    prompt = prompt.replace("<<TOTAL_PAGES>>", str(total_pages))

    try:
        response = create_completion(
            MODELS["VISION"],
            MODELS["FILE_ANALYSIS"],
            vision_messages(prompt, PAGE_ANALYSIS_USER_MESSAGE, image_url),
            temperature=0.7
        )
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error analyzing page {page_number}: {e}")
        return empty_page_result("Error", "Analysis failed")

    try:
        return extract_json_object(completion_text(response))
    except ValueError as e:
        print(f"Error parsing JSON for page {page_number}: {e}")
        return empty_page_result("Unknown", "Failed to parse page analysis")


def request_document_analysis(first_image_url: str, page_results: list[tuple[int, dict]]) -> Optional[dict]:
    """Whole-document summary, or None when the reply is not usable JSON"""
    if MOCK_MODE:
        return mock_document_analysis(len(page_results))

    page_summaries = "\n".join(
        f"Page {number}: {_page_content(result)}" for number, result in page_results
    )
    prompt = DOCUMENT_ANALYSIS_PROMPT.replace("<<TOTAL_PAGES>>", str(len(page_results)))
    prompt = prompt.replace("<<PAGE_SUMMARIES>>", page_summaries)

    response = create_completion(
        MODELS["VISION"],
        MODELS["FILE_ANALYSIS"],
        vision_messages(prompt, DOCUMENT_ANALYSIS_USER_MESSAGE, first_image_url),
        temperature=0.7
    )
    try:
        return extract_json_object(completion_text(response))
    except ValueError as e:
        print(f"Error parsing final analysis, merging page results: {e}")
        return None


def analyze_document(image_urls: list[str]) -> dict:
    total_pages = len(image_urls)
    page_results = []
    for i, image_url in enumerate(image_urls):
        page_results.append((i + 1, analyze_page(image_url, i + 1, total_pages)))

    overall = request_document_analysis(image_urls[0], page_results)
    if overall is not None:
        analysis = normalize_analysis(overall)
    else:
        analysis = merge_page_results(page_results)

    analysis["pageAnalysis"] = [page_entry(number, result) for number, result in page_results]
    return DocumentAnalysis(**analysis).model_dump()


# ============== NORMALISATION ==============

def _section(data: dict, name: str) -> dict:
    value = data.get(name)
    return value if isinstance(value, dict) else {}


def _text(value, default: str = "") -> str:
    if value is None or value == "":
        return default
    return value if isinstance(value, str) else str(value)


def _text_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        if isinstance(item, str):
            items.append(item)
        elif isinstance(item, dict):
            items.append(": ".join(str(v) for v in item.values()))
        elif item is not None:
            items.append(str(item))
    return items


def _definition_list(value) -> list:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, (str, dict)) else str(item) for item in value if item is not None]


def _word_count(value) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _unique(items: list) -> list:
    seen = set()
    unique = []
    for item in items:
        key = item if isinstance(item, str) else json.dumps(item, sort_keys=True)
        if key not in seen:
            seen.add(key)
            unique.append(item)
    return unique


def _list_for(field: str, value) -> list:
    if field == "definitions":
        return _definition_list(value)
    return _text_list(value)


def normalize_analysis(data: dict) -> dict:
    """Fill every field of a model-produced analysis, defaulting what is missing"""
    context = _section(data, "documentContext")
    analysis = {
        "documentContext": {
            "type": _text(context.get("type"), "Unknown"),
            "subject": _text(context.get("subject"), "Unknown"),
            "level": _text(context.get("level"), "Unknown"),
            "wordCount": _word_count(context.get("wordCount")),
            "keyTopics": _text_list(context.get("keyTopics")),
        }
    }
    for section, fields in SECTION_LISTS.items():
        source = _section(data, section)
        analysis[section] = {field: _list_for(field, source.get(field)) for field in fields}
    analysis["summary"]["overview"] = _text(_section(data, "summary").get("overview"), "No overview available")
    return analysis


def merge_page_results(page_results: list[tuple[int, dict]]) -> dict:
    """Build a document analysis out of page analyses: page 1 sets the context, lists are unioned"""
    results = [result for _, result in page_results]
    first = results[0] if results else {}
    first_context = _section(first, "documentContext")

    analysis = {
        "documentContext": {
            "type": _text(first_context.get("type"), "Unknown"),
            "subject": _text(first_context.get("subject"), "Unknown"),
            "level": _text(first_context.get("level"), "Unknown"),
            "wordCount": _word_count(first_context.get("wordCount")),
            "keyTopics": _unique([t for r in results for t in _text_list(_section(r, "documentContext").get("keyTopics"))]),
        }
    }
    for section, fields in SECTION_LISTS.items():
        analysis[section] = {
            field: _unique([item for r in results for item in _list_for(field, _section(r, section).get(field))])
            for field in fields
        }
    analysis["summary"]["overview"] = _text(_section(first, "summary").get("overview"), "No overview available")
    return analysis


def _page_content(result: dict) -> str:
    page = _section(result, "pageAnalysis")
    return (_text(page.get("content"))
            or _text(_section(result, "summary").get("overview"))
            or "No content available")


def page_entry(page_number: int, result: dict) -> dict:
    page = _section(result, "pageAnalysis")
    entry = {"pageNumber": page_number, "content": _page_content(result)}
    for field in PAGE_LISTS:
        entry[field] = _text_list(page.get(field))
    entry["importance"] = _text(page.get("importance"))
    return entry


# ============== CHAT CONTEXT ==============

def _bullets(items) -> str:
    lines = []
    for item in items:
        if isinstance(item, dict):
            item = ": ".join(str(v) for v in item.values())
        lines.append(f"- {item}")
    return "\n".join(lines)


def _pages_block(analysis: DocumentAnalysis) -> str:
    blocks = []
    for page in analysis.pageAnalysis:
        blocks.append(
            f"\nPage {page.pageNumber}:\n"
            f"Content: {page.content}\n"
            f"Key Points:\n{_bullets(page.keyPoints)}\n"
            f"Useful Content:\n{_bullets(page.usefulContent)}\n"
        )
    return "\n".join(blocks)


def render_chat_context(context: Optional[DocumentAnalysis], questions: Optional[DocumentAnalysis],
                        active_document: Optional[str]) -> str:
    """Plain-text rendering of document analyses, sent to the chat model as document content"""
    if active_document == "questions" and context is not None and questions is not None:
        ctx = context.documentContext
        word_count = f"Word Count: {ctx.wordCount}\n" if ctx.wordCount else ""
        return (
            "Context Document Analysis:\n"
            f"Type: {ctx.type}\nSubject: {ctx.subject}\nLevel: {ctx.level}\n{word_count}\n"
            f"Context Key Topics:\n{_bullets(ctx.keyTopics)}\n\n"
            f"Context Main Points:\n{_bullets(context.contentBreakdown.mainPoints)}\n\n"
            f"Context Key Definitions:\n{_bullets(context.contentBreakdown.definitions)}\n\n"
            "Questions Document Analysis:\n"
            f"Type: {questions.documentContext.type}\n"
            f"Subject: {questions.documentContext.subject}\n"
            f"Level: {questions.documentContext.level}\n\n"
            f"Questions Overview:\n{questions.summary.overview}\n\n"
            f"Questions Key Points:\n{_bullets(questions.summary.keyPoints)}\n\n"
            f"Questions Page-by-Page Analysis:\n{_pages_block(questions)}\n\n"
            f"Context Document References:\n{_bullets(context.contentBreakdown.references)}\n\n"
            f"Writing Guide from Context:\n{_bullets(context.writingGuide.suggestedPoints)}\n"
        )

    analysis = questions if active_document == "questions" else context
    if analysis is None:
        return "No analysis available."

    ctx = analysis.documentContext
    word_count = f"- Word Count: {ctx.wordCount}\n" if ctx.wordCount else ""
    return (
        "Document Context:\n"
        f"- Type: {ctx.type}\n- Subject: {ctx.subject}\n- Level: {ctx.level}\n{word_count}\n"
        f"Key Topics:\n{_bullets(ctx.keyTopics)}\n\n"
        f"Main Points:\n{_bullets(analysis.contentBreakdown.mainPoints)}\n\n"
        f"Key Definitions:\n{_bullets(analysis.contentBreakdown.definitions)}\n\n"
        f"Examples:\n{_bullets(analysis.contentBreakdown.examples)}\n\n"
        f"References:\n{_bullets(analysis.contentBreakdown.references)}\n\n"
        f"Writing Guide:\n{_bullets(analysis.writingGuide.suggestedPoints)}\n\n"
        f"Page-by-Page Analysis:\n{_pages_block(analysis)}\n"
    )
