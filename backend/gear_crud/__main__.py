"""Run the service with uvicorn on the configured host and port."""

import uvicorn

from gear_crud.config import settings


def main() -> None:
    uvicorn.run(
        "gear_crud.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.logging_level_name.lower(),
    )


if __name__ == "__main__":
    main()
