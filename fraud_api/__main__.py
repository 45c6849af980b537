import uvicorn

from fraud_api.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run("fraud_api.main:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
