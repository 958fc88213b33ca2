"""FastAPI web layer for dedications."""
