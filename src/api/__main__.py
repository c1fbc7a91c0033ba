# Run with: python -m api   (or: uvicorn api.app:app --host 0.0.0.0 --port 8787)
from config.settings import get_settings


def main() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("api.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
