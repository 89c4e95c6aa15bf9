"""Run the render service with uvicorn: ``python -m shareable``."""
import uvicorn

from .core.config import settings


def main() -> None:
    uvicorn.run("shareable.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
