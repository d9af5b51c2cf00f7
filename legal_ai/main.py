import uvicorn

from legal_ai.api.app import create_app
from legal_ai.config.settings import Settings
from legal_ai.database.connection import close_pool, init_pool
from legal_ai.logging.logger import Log
from legal_ai.pipeline.orchestrator import build_orchestrator


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> serve HTTP."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        orchestrator = build_orchestrator(settings)
        app = create_app(orchestrator)
        Log.info(f"Serving on {settings.http_host}:{settings.http_port} ({settings.app_env})")
        uvicorn.run(app, host=settings.http_host, port=settings.http_port, log_config=None)
    finally:
        close_pool()


if __name__ == "__main__":
    main()
