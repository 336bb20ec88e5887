"""Run the rightsclaims service: python3 -m rightsclaims"""

import uvicorn

from rightsclaims.config import settings


def main() -> None:
    uvicorn.run("rightsclaims.api.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
