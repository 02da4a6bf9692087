"""HTTP API layer: FastAPI routers, schemas and dependencies."""
