"""Entry point for `python -m loginthemes`."""

import os
import sys


def main():
    import uvicorn

    from loginthemes.app import create_app

    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(create_app(), host=os.getenv("HOST", "127.0.0.1"), port=port, log_level="info")
    return 0


if __name__ == "__main__":
    sys.exit(main())
