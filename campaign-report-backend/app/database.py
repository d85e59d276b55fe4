"""SQLAlchemy engine/session construction for the report document store.

Nothing is connected at import time: the store is optional, so the engine is
only built when the report store is configured (see app.integrations).
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase


class Base(DeclarativeBase):
	pass


def build_engine(url: str, connect_timeout: float | None = None) -> Engine:
	"""Create an engine for ``url``.

	SQLite needs ``check_same_thread`` relaxed because FastAPI may run handlers
	on a different thread than the one that opened the connection.
	"""
	connect_args: dict[str, object] = {}
	if url.startswith("sqlite"):
		connect_args["check_same_thread"] = False
		if connect_timeout is not None:
			connect_args["timeout"] = connect_timeout
	elif connect_timeout is not None:
		connect_args["connect_timeout"] = int(connect_timeout)
	return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
	return sessionmaker(autocommit=False, autoflush=False, bind=engine)
