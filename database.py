import enum
from datetime import datetime, timezone
from sqlalchemy import create_engine, Column, Integer, String, Float, DateTime, Text
from sqlalchemy.orm import sessionmaker, declarative_base

from config import get_settings

# Database Setup
DB_URL = get_settings().database_url

engine = create_engine(DB_URL, connect_args={"check_same_thread": False} if "sqlite" in DB_URL else {})
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


class TransactionType(str, enum.Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


TRANSACTION_TYPES = tuple(t.value for t in TransactionType)


def utcnow() -> datetime:
    """Current time as naive UTC, the form timestamps are stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# --- Models ---

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    amount = Column(Float, nullable=False)
    category = Column(String, nullable=False)
    note = Column(Text, nullable=True)

    # Plain text, not an Enum column: old rows may hold values outside TransactionType
    type = Column(String, nullable=False, default=TransactionType.EXPENSE.value)
    date = Column(DateTime, nullable=False, default=utcnow, index=True)

    def __repr__(self):
        return f"<Transaction id={self.id} {self.type} {self.amount} {self.category!r}>"


# --- Init DB ---
def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
