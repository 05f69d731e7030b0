"""Legal chat gateway: FastAPI front door for a RAG-assisted model server."""

__version__ = "0.1.0"
