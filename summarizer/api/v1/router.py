from fastapi import APIRouter

from summarizer.api.v1.endpoints import history, summarize

api_router = APIRouter()

api_router.include_router(summarize.router, prefix="/summarize", tags=["Summarize"])
api_router.include_router(history.router, prefix="/history", tags=["History"])
