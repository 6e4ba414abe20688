"""
Database configuration and session management for the Inventory API.

This module builds the SQLAlchemy engine and session factory used by the
database storage backend, and holds the declarative base for ORM models.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

# Base class for declarative models
Base = declarative_base()


def make_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.

    Args:
        database_url: SQLAlchemy database URL
        echo: Log every SQL statement

    Returns:
        Engine: engine bound to the database
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        # request handlers run in a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=echo, connect_args=connect_args)


def make_session_factory(engine: Engine) -> sessionmaker:
    """
    Create the session factory and make sure the inventory table exists.

    Args:
        engine: Engine returned by make_engine

    Returns:
        sessionmaker: factory producing Session objects
    """
    from . import models  # noqa: F401  registers the inventory table on Base

    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
