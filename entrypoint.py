"""Server entrypoint for deployments. Host and port come from the environment."""
import os
import uvicorn

from fundbalance.main import app


def main() -> None:
    host = os.environ.get("FUNDBALANCE_HOST", "127.0.0.1")
    port = int(os.environ.get("FUNDBALANCE_PORT", "8080"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
