from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import CORS_ORIGINS, MOCK_MODE
from database import init_db, close_db, get_db
from routers import (clients, projects, tasks, invoices, time_tracking, dashboard,
                     resources, analysis, assistant)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tests hand in their own database before the app starts
    opened_here = get_db() is None and init_db()
    if MOCK_MODE:
        print("MOCK_MODE enabled - AI endpoints return local results")
    yield
    if opened_here:
        close_db()


app = FastAPI(title="Ziio", description="Freelancer workspace with AI document tools", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Errors go out as {"error": ...}; dict details already carry that shape
    body = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())}
    )


app.include_router(clients.router)
app.include_router(projects.router)
app.include_router(tasks.router)
app.include_router(invoices.router)
app.include_router(time_tracking.router)
app.include_router(dashboard.router)
app.include_router(resources.router)
app.include_router(analysis.router)
app.include_router(assistant.router)


@app.get("/")
def read_root():
    return {"status": "online", "message": "Ziio API - clients, projects, time tracking and document analysis"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8081)
