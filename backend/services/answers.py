from typing import Optional

import fitz  # PyMuPDF

from config import MOCK_MODE, MODELS
from services.llm import create_completion, completion_text
from services.mock import mock_answer
from prompts.answers import (ANSWER_PROMPT, CUSTOM_INSTRUCTIONS_BLOCK, ANSWER_INTRODUCTION,
                             ANSWER_REQUIREMENT_PARAGRAPH, ANSWER_CONCLUSION)
from schemas.analysis import PageAnalysis, AnsweredQuestion

# A4 in points
PAGE_WIDTH = 595
PAGE_HEIGHT = 842
MARGIN = 50
FONT_SIZE = 12
REGULAR_FONT = "tiro"  # Times-Roman
BOLD_FONT = "tibo"  # Times-Bold
LINE_HEIGHT = 16


def page_requirements(page: PageAnalysis) -> list[str]:
    return page.keyPoints + page.topics + page.arguments


def format_student_answer(question: str, context: str, requirements: list[str]) -> str:
    """Template answer used when the model cannot produce one"""
    paragraphs = [
        ANSWER_REQUIREMENT_PARAGRAPH.format(requirement=req.lower())
        for req in requirements
    ]
    return ANSWER_INTRODUCTION + "\n\n".join(paragraphs) + ANSWER_CONCLUSION


def generate_answer(question: str, context: str, requirements: list[str],
                    custom_instructions: Optional[str] = None) -> str:
    if MOCK_MODE:
        return mock_answer(question)

    custom_block = ""
    if custom_instructions:
        custom_block = CUSTOM_INSTRUCTIONS_BLOCK.replace("<<INSTRUCTIONS>>", custom_instructions)

    prompt = ANSWER_PROMPT.replace("<<QUESTION>>", question)
    prompt = prompt.replace("<<CONTEXT>>", context)
    prompt = prompt.replace("<<REQUIREMENTS>>", "\n".join(f"- {req}" for req in requirements))
    prompt = prompt.replace("<<CUSTOM_INSTRUCTIONS>>", custom_block)

    try:
        response = create_completion(
            MODELS["CHAT"],
            MODELS["CHAT_BACKUP"],
            [{"role": "user", "content": prompt}],
            temperature=0.7,
            max_tokens=2000
        )
        answer = completion_text(response)
        if not answer:
            raise ValueError("Empty answer from model")
        return answer
    except Exception as e:
        print(f"Error generating answer, using template: {e}")
        return format_student_answer(question, context, requirements)


def answer_questions(pages: list[PageAnalysis], context: str,
                     custom_instructions: Optional[str] = None) -> list[AnsweredQuestion]:
    answers = []
    for page in pages:
        answer = generate_answer(page.content, context, page_requirements(page), custom_instructions)
        answers.append(AnsweredQuestion(question=page.content, answer=answer, pageNumber=page.pageNumber))
    return answers


# ============== PDF OUTPUT ==============

def wrap_text(text: str, max_width: float, fontname: str = REGULAR_FONT, fontsize: float = FONT_SIZE) -> list[str]:
    lines = []
    current = ""
    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and fitz.get_text_length(candidate, fontname=fontname, fontsize=fontsize) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines


class AnswerPageWriter:
    """Writes lines top-down onto appended A4 pages, starting a new page when one fills up"""

    def __init__(self, doc):
        self.doc = doc
        self.page = None
        self.y = 0
        self.new_page()

    def new_page(self):
        self.page = self.doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        self.y = MARGIN + FONT_SIZE

    def write_line(self, text: str, fontname: str = REGULAR_FONT, advance: float = LINE_HEIGHT):
        if self.y > PAGE_HEIGHT - MARGIN:
            self.new_page()
        self.page.insert_text((MARGIN, self.y), text, fontname=fontname, fontsize=FONT_SIZE)
        self.y += advance

    def write_block(self, text: str, fontname: str = REGULAR_FONT, after: float = LINE_HEIGHT):
        lines = wrap_text(text, PAGE_WIDTH - 2 * MARGIN, fontname)
        for i, line in enumerate(lines):
            self.write_line(line, fontname, after if i == len(lines) - 1 else LINE_HEIGHT)


def generate_answered_pdf(pdf_bytes: bytes, answers: list[AnsweredQuestion]) -> bytes:
    """Original pages followed by one new page per answered question"""
    doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    try:
        for answer in answers:
            writer = AnswerPageWriter(doc)
            writer.write_line(f"Question from Page {answer.pageNumber}:", BOLD_FONT, 20)
            writer.write_block(answer.question, REGULAR_FONT, 30)
            writer.write_line("Answer:", BOLD_FONT, 20)
            for paragraph in answer.answer.split("\n\n"):
                if paragraph.strip():
                    writer.write_block(paragraph, REGULAR_FONT, 24)
        return doc.tobytes()
    finally:
        doc.close()
