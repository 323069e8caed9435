"""Server entrypoint: starts uvicorn on the configured host and port."""

import uvicorn

from papertrade.config.settings import get_settings
from papertrade.main import app


def main() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.server_host, port=settings.server_port)


if __name__ == "__main__":
    main()
