import json
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, HTTPException, UploadFile, File, Form
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from pydantic import ValidationError

from config import MOCK_MODE, MODELS
from services.llm import create_completion, completion_text, clean_llm_response, error_status, error_message
from services.document_analysis import render_pdf_pages, analyze_document, vision_messages
from services.answers import answer_questions, generate_answered_pdf
from services.db_ops import save_file_analysis, list_file_analyses, require_db
from services.mock import mock_assessment_analysis

from schemas.ai import AnalyzeInput
from schemas.analysis import DocumentAnalysis, FileAnalysisInput, FileAnalysisResult
from schemas.common import SuccessResponse

from prompts.analyze import ASSESSMENT_ANALYSIS_PROMPT, ANALYZE_USER_MESSAGE

router = APIRouter(prefix="/api", tags=["analysis"])

DOCUMENT_TYPES = ("context", "questions")


# ============== PAGE IMAGE ANALYSIS ==============

@router.post("/analyze")
async def analyze_page_image(input: AnalyzeInput):
    """Analyse one rendered page of an assessment document"""
    if not input.image_url or not input.image_url.strip():
        raise HTTPException(status_code=400, detail="No image URL provided")

    if MOCK_MODE:
        return mock_assessment_analysis(input.image_url, input.page_number, input.total_pages)

    prompt = ASSESSMENT_ANALYSIS_PROMPT.replace("<<PAGE_NUMBER>>", str(input.page_number))
    prompt = prompt.replace("<<TOTAL_PAGES>>", str(input.total_pages))

    try:
        response = create_completion(
            MODELS["VISION"],
            MODELS["FILE_ANALYSIS"],
            vision_messages(prompt, ANALYZE_USER_MESSAGE, input.image_url),
            temperature=0.7
        )
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error analyzing page {input.page_number}: {e}")
        raise HTTPException(
            status_code=error_status(e),
            detail={"error": "Failed to analyze document", "details": error_message(e)}
        )

    content = completion_text(response)
    if not content:
        raise HTTPException(status_code=500, detail="No analysis results received")

    try:
        return json.loads(clean_llm_response(content))
    except json.JSONDecodeError as e:
        print(f"Error parsing analysis JSON: {e}")
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to parse analysis results", "details": str(e)}
        )


# ============== STORED ANALYSES ==============

@router.post("/file-analysis", response_model=SuccessResponse)
async def store_file_analysis(input: FileAnalysisInput):
    require_db()
    analysis_id = save_file_analysis(input.fileName, input.fileSize, input.analysis)
    if analysis_id is None:
        raise HTTPException(status_code=500, detail="Failed to save file analysis")
    return SuccessResponse(success=True, id=analysis_id)


@router.get("/file-analysis")
async def get_file_analyses():
    try:
        return list_file_analyses()
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error fetching file analyses: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch file analyses")


# ============== SERVER-SIDE PDF PIPELINE ==============

async def read_pdf_upload(file: UploadFile) -> bytes:
    filename = (file.filename or "").lower()
    if not filename.endswith(".pdf") and file.content_type != "application/pdf":
        raise HTTPException(status_code=400, detail="Only PDF files are supported")
    pdf_bytes = await file.read()
    if not pdf_bytes:
        raise HTTPException(status_code=400, detail="Empty file")
    return pdf_bytes


@router.post("/file-analysis/upload", response_model=FileAnalysisResult)
async def upload_file_for_analysis(
    file: UploadFile = File(...),
    document_type: str = Form("context"),
    save: bool = Form(True)
):
    """Render a PDF, analyse every page, then the whole document"""
    if document_type not in DOCUMENT_TYPES:
        raise HTTPException(status_code=400, detail="Invalid document type")

    pdf_bytes = await read_pdf_upload(file)
    try:
        image_urls = await run_in_threadpool(render_pdf_pages, pdf_bytes)
    except (RuntimeError, ValueError) as e:
        print(f"Error rendering PDF {file.filename}: {e}")
        raise HTTPException(status_code=400, detail="Could not read PDF file")

    if not image_urls:
        raise HTTPException(status_code=400, detail="PDF has no pages")

    try:
        analysis = await run_in_threadpool(analyze_document, image_urls)
    except HTTPException:
        raise
    except Exception as e:
        print(f"Error analyzing document {file.filename}: {e}")
        raise HTTPException(
            status_code=error_status(e),
            detail={"error": "Failed to analyze document", "details": error_message(e)}
        )

    analysis_id = save_file_analysis(file.filename, len(pdf_bytes), analysis) if save else None

    return FileAnalysisResult(
        documentType=document_type,
        fileName=file.filename or "document.pdf",
        totalPages=len(image_urls),
        analysis=analysis,
        id=analysis_id
    )


@router.post("/file-analysis/answers")
async def generate_answers_pdf(
    file: UploadFile = File(...),
    questions_analysis: str = Form(...),
    context_overview: str = Form(""),
    custom_instructions: Optional[str] = Form(None)
):
    """Answer each analysed question page and return the PDF with answer pages appended"""
    try:
        analysis = DocumentAnalysis.model_validate_json(questions_analysis)
    except ValidationError as e:
        raise HTTPException(
            status_code=400,
            detail={"error": "Invalid questions analysis", "details": e.errors(include_url=False)}
        )
    if not analysis.pageAnalysis:
        raise HTTPException(status_code=400, detail="No questions to answer")

    pdf_bytes = await read_pdf_upload(file)
    answers = await run_in_threadpool(
        answer_questions, analysis.pageAnalysis, context_overview, custom_instructions
    )

    try:
        output = await run_in_threadpool(generate_answered_pdf, pdf_bytes, answers)
    except (RuntimeError, ValueError) as e:
        print(f"Error writing answers PDF: {e}")
        raise HTTPException(status_code=400, detail="Could not read PDF file")

    filename = f"{Path(file.filename or 'document.pdf').stem}_with_answers.pdf"
    return Response(
        content=output,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
