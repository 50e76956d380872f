"""FastAPI routers for the Chemodose API.

Each router handles a specific domain of endpoints:
- system: Health check, version info
- drugs: Catalogue CRUD, reorder, duplicate, import/export
- calculate: Dose calculation, formula preview, lint
"""
