"""Entry point for running the Refund Microservice."""

import uvicorn

from hotdel_refund_ms.shared.core.settings import get_settings


def main() -> None:
    """Run the FastAPI application."""
    settings = get_settings()
    uvicorn.run(
        "hotdel_refund_ms.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
