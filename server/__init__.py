"""FastAPI server persisting the canvas in SQLite."""
