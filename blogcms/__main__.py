import uvicorn

from blogcms.core.config import settings


def main():
    uvicorn.run("blogcms.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
