"""Run the URL shortener with uvicorn: `python -m shortlink`."""

import uvicorn

from shortlink.core.config import settings


def main() -> None:
    uvicorn.run(
        "shortlink.main:get_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,  # get_app() routes uvicorn's loggers through loguru
    )


if __name__ == "__main__":
    main()
