from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse

from config import MOCK_MODE, MODELS
from services.llm import create_completion, stream_text, error_status, error_message
from services.document_analysis import render_chat_context
from services.mock import mock_proofread, mock_chat_reply, mock_article

from schemas.ai import ChatInput, ArticleInput

from prompts.proofread import PROOFREAD_PROMPT
from prompts.chat import (QUESTIONS_SYSTEM_PROMPT, DOCUMENT_SYSTEM_PROMPT, QUESTIONS_CLOSING,
                          DOCUMENT_CLOSING, CHAT_SYSTEM_TEMPLATE)
from prompts.article import ARTICLE_SYSTEM_PROMPT, ARTICLE_USER_PROMPT

router = APIRouter(prefix="/api", tags=["assistant"])


def text_stream(chunks) -> StreamingResponse:
    return StreamingResponse(chunks, media_type="text/plain; charset=utf-8")


def stream_completion(failure: str, model: str, fallback_model: str, messages: list, **kwargs) -> StreamingResponse:
    """Start a streamed completion; errors before the first chunk keep the gateway's status"""
    try:
        response = create_completion(model, fallback_model, messages, stream=True, **kwargs)
    except HTTPException:
        raise
    except Exception as e:
        print(f"{failure}: {e}")
        raise HTTPException(status_code=error_status(e), detail={"error": failure, "details": error_message(e)})
    return text_stream(stream_text(response))


# ============== PROOFREADING ==============

@router.post("/proofread")
async def proofread(request: Request):
    """Proofread the raw request body; streams the model's JSON report"""
    text = (await request.body()).decode("utf-8", errors="replace")
    if not text.strip():
        raise HTTPException(status_code=400, detail="No text provided")

    if MOCK_MODE:
        return text_stream(iter([mock_proofread(text)]))

    return stream_completion(
        "Proofreading failed",
        MODELS["PROOFREAD"],
        MODELS["PROOFREAD_BACKUP"],
        [
            {"role": "system", "content": PROOFREAD_PROMPT},
            {"role": "user", "content": text}
        ],
        temperature=0.7,
        max_tokens=2000
    )


# ============== DOCUMENT CHAT ==============

def chat_system_message(input: ChatInput) -> str:
    questions_mode = input.active_document == "questions"
    base_message = input.system_message or (QUESTIONS_SYSTEM_PROMPT if questions_mode else DOCUMENT_SYSTEM_PROMPT)

    file_content = input.file_content
    if not file_content and input.analyses is not None:
        file_content = render_chat_context(
            input.analyses.context, input.analyses.questions, input.active_document
        )

    message = CHAT_SYSTEM_TEMPLATE.replace("<<BASE_MESSAGE>>", base_message)
    message = message.replace("<<FILE_CONTENT>>", file_content or "")
    return message.replace("<<CLOSING>>", QUESTIONS_CLOSING if questions_mode else DOCUMENT_CLOSING)


@router.post("/chat")
async def chat(input: ChatInput):
    messages = [{"role": "system", "content": chat_system_message(input)}]
    messages += [m.model_dump() for m in input.messages]

    if MOCK_MODE:
        return text_stream(iter([mock_chat_reply(messages)]))

    return stream_completion(
        "Chat failed",
        MODELS["CHAT"],
        MODELS["CHAT_BACKUP"],
        messages,
        temperature=0.7,
        max_tokens=2000
    )


# ============== ARTICLE WRITING ==============

@router.post("/article")
async def write_article(input: ArticleInput):
    if not input.topic.strip():
        raise HTTPException(status_code=400, detail="No topic provided")

    if MOCK_MODE:
        return text_stream(iter([mock_article(input.topic, input.style, input.length)]))

    return stream_completion(
        "Article generation failed",
        MODELS["ARTICLE_WRITING"],
        MODELS["CHAT_BACKUP"],
        [
            {"role": "system", "content": ARTICLE_SYSTEM_PROMPT},
            {"role": "user", "content": ARTICLE_USER_PROMPT.format(
                topic=input.topic, style=input.style, length=input.length)}
        ]
    )
