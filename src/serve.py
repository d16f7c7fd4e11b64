"""Run one of the services with uvicorn.

Usage:
    python -m src.serve auth
    python -m src.serve catalogue
"""

import argparse

import uvicorn

from src.config import get_settings

FACTORIES = {
    "auth": "src.main:create_auth_app",
    "catalogue": "src.main:create_catalogue_app",
}


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a meal-prep service")
    parser.add_argument("service", choices=sorted(FACTORIES))
    parser.add_argument("--host", default="0.0.0.0")  # noqa: S104
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    settings = get_settings()
    default_port = settings.auth_port if args.service == "auth" else settings.recipe_catalogue_port

    uvicorn.run(
        FACTORIES[args.service],
        factory=True,
        host=args.host,
        port=args.port or default_port,
        reload=args.reload,
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
