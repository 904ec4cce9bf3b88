"""Run the Weather API with uvicorn: ``python -m weatherapi``."""

import uvicorn

from weatherapi.api.app import create_app
from weatherapi.config import get_settings


def main() -> None:
    """Load settings, build the app and serve it.

    Invalid configuration raises ConfigurationError here, before the
    server binds its socket.
    """
    settings = get_settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.api.host, port=settings.api.port, log_config=None)


if __name__ == "__main__":
    main()
