"""FastAPI backend application entry point.

This module initializes the application using the factory pattern.
It serves as the entry point for uvicorn.
"""
import os

import uvicorn

from backend.app_factory import DEFAULT_API_PORT, create_app

# Create the application instance using the factory
# This global 'app' variable is what uvicorn looks for
app = create_app()


def main() -> None:
    """Run the application using uvicorn when executed directly."""
    port = int(os.getenv("REEF_API_PORT", str(DEFAULT_API_PORT)))

    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=port,
        log_level=os.getenv("REEF_LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
