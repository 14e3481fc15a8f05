"""SQLite engine shared by the paper trading store"""

from pathlib import Path

from loguru import logger
from sqlmodel import Session, SQLModel, create_engine

IN_MEMORY = ":memory:"


class BaseDatabase:
    """Owns the SQLite engine and the table schema

    Table operations live in subclasses; this class only opens the file,
    creates the portfolio, position and order tables, and hands out
    sessions.
    """

    def __init__(self, db_path: str | Path) -> None:
        """Open (or create) the store

        Args:
            db_path: SQLite file, or ":memory:" for a throwaway store
        """
        self.db_path = str(db_path)
        if self.db_path != IN_MEMORY:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        # Reconciliation may run from any event-loop thread
        self.engine = create_engine(
            f"sqlite:///{self.db_path}",
            connect_args={"check_same_thread": False},
            echo=False,
        )
        self._create_schema()
        logger.info(f"Paper trading store opened: {self.db_path}")

    def _create_schema(self) -> None:
        SQLModel.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        """New session; the caller commits or rolls back and closes it"""
        return Session(self.engine)

    def close(self) -> None:
        if self.engine:
            self.engine.dispose()
            logger.info(f"Paper trading store closed: {self.db_path}")

    def __enter__(self) -> "BaseDatabase":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
