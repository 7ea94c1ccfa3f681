import os

from fastapi.openapi.utils import get_openapi
from dotenv import load_dotenv

# Load environment variables before the settings object is built
load_dotenv()  # This reads .env into os.environ

from cleanpro.main import app  # noqa: E402


def custom_openapi() -> dict:
    """Return OpenAPI schema with project metadata."""
    if app.openapi_schema:
        return app.openapi_schema
    app.openapi_schema = get_openapi(
        title="CleanPro Console API",
        version="1.0.0",
        description=(
            "Rate catalog, quote pricing and quote-to-proposal workflow for a "
            "cleaning services business."
        ),
        routes=app.routes,
    )
    return app.openapi_schema


app.openapi = custom_openapi

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cleanpro.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
        reload=os.getenv("UVICORN_RELOAD", "1") == "1",
    )
