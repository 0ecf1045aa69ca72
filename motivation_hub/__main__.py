"""Run the HTTP backend with uvicorn on the configured host and port."""

import logging

import uvicorn

from motivation_hub.config import Settings, load_environment_from_dotenv
from motivation_hub.main import create_app


logger = logging.getLogger(__name__)


def main() -> None:
    load_environment_from_dotenv(".env")
    settings = Settings.from_env()
    application = create_app(settings)
    logger.info("server_starting host=%s port=%s", settings.host, settings.port)
    # log_config=None keeps the dictConfig installed by create_app().
    uvicorn.run(application, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
