"""Process entrypoint: serve the ledger API with uvicorn on the configured host and port."""

from __future__ import annotations

import uvicorn

from marketplace.api.api_config import get_api_config
from marketplace.api.app import app


def main() -> None:
    config = get_api_config()
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
