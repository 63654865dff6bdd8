# backend/tests/factories/base.py

from factory.alchemy import SQLAlchemyModelFactory


class BaseFactory(SQLAlchemyModelFactory):
    """Base factory with session management for all test factories."""

    class Meta:
        abstract = True
        sqlalchemy_session_persistence = "commit"

    @classmethod
    def bind_session(cls, session):
        """Point every factory at the test session."""
        for factory_class in cls._registry():
            factory_class._meta.sqlalchemy_session = session

    @classmethod
    def reset_session(cls):
        """Reset the session (useful between tests)."""
        for factory_class in cls._registry():
            factory_class._meta.sqlalchemy_session = None

    @classmethod
    def _registry(cls):
        pending = [cls]
        while pending:
            factory_class = pending.pop()
            yield factory_class
            pending.extend(factory_class.__subclasses__())
