"""
Commit message relay package.

Provides:
- FastAPI service that turns a staged diff into a commit message
- Async Gemini client used as the upstream generation service
"""
