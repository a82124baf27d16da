import uvicorn

from pastemd.core.config import settings
from pastemd.core.logging import configure_logging
from pastemd.main import create_app


def main() -> None:
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
