import uvicorn

from app.core.config import HOST, PORT


def run() -> None:
    # log_config=None mantém o formatter JSON configurado em app.main
    uvicorn.run("app.main:app", host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    run()
