import argparse

from config import get_settings
from database import init_db, SessionLocal, Transaction
from logger import setup_logging
from repository import create_transaction
from serialization import to_record

DEMO_TRANSACTIONS = [
    {"amount": 8500, "category": "Salary", "type": "INCOME", "date": "2024-01-01", "note": "January salary"},
    {"amount": 2600, "category": "Rent", "type": "EXPENSE", "date": "2024-01-02"},
    {"amount": 312.4, "category": "Food", "type": "EXPENSE", "date": "2024-01-05", "note": "Groceries"},
    {"amount": 45, "category": "Transport", "type": "EXPENSE", "date": "2024-01-06"},
    {"amount": 128, "category": "Food", "type": "EXPENSE", "date": "2024-01-09", "note": "Dinner out"},
    {"amount": 600, "category": "Freelance", "type": "INCOME", "date": "2024-01-12"},
]


def seed_transactions():
    logger = setup_logging(get_settings())
    init_db()
    with SessionLocal() as db:
        # Check if transactions exist
        if db.query(Transaction).first():
            logger.info("Transactions already exist. Skipping seed.")
            return 0

        for payload in DEMO_TRANSACTIONS:
            create_transaction(db, to_record(payload))
    logger.info("Database initialized with %d demo transactions.", len(DEMO_TRANSACTIONS))
    return len(DEMO_TRANSACTIONS)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create the money tracker tables")
    parser.add_argument("--demo", action="store_true", help="Insert sample transactions into an empty database")
    args = parser.parse_args(argv)

    if args.demo:
        seed_transactions()
    else:
        setup_logging(get_settings()).info("Creating tables")
        init_db()


if __name__ == "__main__":
    main()
