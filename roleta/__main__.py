"""Sobe a API com uvicorn: python -m roleta"""

import uvicorn

from roleta.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "roleta.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
