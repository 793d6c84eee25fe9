"""
Database Configuration Module

This module handles the database connection setup for the ledger service.
It uses SQLAlchemy for ORM (Object-Relational Mapping); PostgreSQL is the
production database and SQLite is used for local runs and tests.

The module includes:
- Engine construction from a database URL
- Session factory construction
- Base model class definition
- The per-request session dependency
"""

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Base is the declarative base class that our ORM models will inherit from
Base = declarative_base()


def make_engine(database_url: str):
    """
    Create the SQLAlchemy engine for a database URL.

    In-memory SQLite databases share one connection across threads so that
    every session sees the same data.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


def make_session_factory(engine):
    # autocommit=False means we need to explicitly commit transactions
    # autoflush=False means we need to explicitly flush changes to the database
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Dependency to get database session
def get_db(request: Request):
    """
    Dependency function that provides a database session.

    A new session is created for each request from the factory stored on the
    application state and closed after the request is completed.

    Yields:
        Session: A SQLAlchemy database session
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
