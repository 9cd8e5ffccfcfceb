"""
SupportAudit HTTP API (FastAPI).

Run with:
    uvicorn supportaudit.api.main:app
"""
