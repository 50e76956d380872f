"""FastAPI backend for the Chemodose calculator.

The application object lives in ``chemodose.api.main:app``.
"""
