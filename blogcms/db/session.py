from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session


def build_engine(database_url: str) -> Engine:
    # check_same_thread is needed for SQLite, remove for PostgreSQL
    connect_args = {"check_same_thread": False} if "sqlite" in database_url else {}
    return create_engine(database_url, connect_args=connect_args)


def get_session(request: Request):
    with Session(request.app.state.engine) as session:
        yield session


def create_db_and_tables(engine: Engine):
    # Table classes must be imported before create_all sees them
    import blogcms.models  # noqa: F401

    SQLModel.metadata.create_all(engine)
