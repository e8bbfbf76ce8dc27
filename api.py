"""JSON API for recording and listing transactions, served by FastAPI."""

from typing import Any, Dict, List

from fastapi import Body, Depends, FastAPI, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from aggregation import Totals, category_breakdown, compute_totals
from database import get_db
from errors import InvalidTransaction, NotFound, PersistenceError
from logger import get_logger
from repository import create_transaction, delete_transaction, list_transactions
from serialization import TransactionOut, serialize, to_record
from validation import parse_transaction_id

logger = get_logger()

app = FastAPI(title="Money Tracker API", version="0.1.0")


class DeleteResponse(BaseModel):
    success: bool


class SummaryResponse(BaseModel):
    totals: Totals
    categories: Dict[str, float]


@app.get("/transactions", response_model=List[TransactionOut])
def get_transactions(db: Session = Depends(get_db)):
    try:
        rows = list_transactions(db)
        return [serialize(row) for row in rows]
    except (PersistenceError, InvalidTransaction):
        logger.exception("Failed to load transactions")
        raise HTTPException(status_code=500, detail="Unable to load transactions")


@app.post("/transactions", response_model=TransactionOut, status_code=201)
def post_transaction(payload: Any = Body(None), db: Session = Depends(get_db)):
    # Raw JSON: to_record reports non-object bodies and bad fields as 400s
    try:
        fields = to_record(payload)
    except InvalidTransaction as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    try:
        created = create_transaction(db, fields)
    except PersistenceError:
        logger.exception("Failed to create transaction")
        raise HTTPException(status_code=500, detail="Unable to create transaction")
    return serialize(created)


@app.delete("/transactions/{transaction_id}", response_model=DeleteResponse)
def remove_transaction(transaction_id: str, db: Session = Depends(get_db)):
    try:
        parsed_id = parse_transaction_id(transaction_id)
    except InvalidTransaction as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    try:
        delete_transaction(db, parsed_id)
    except NotFound:
        logger.warning("Delete requested for missing transaction %s", parsed_id)
        raise HTTPException(status_code=500, detail="Unable to delete transaction")
    except PersistenceError:
        logger.exception("Failed to delete transaction %s", parsed_id)
        raise HTTPException(status_code=500, detail="Unable to delete transaction")
    return DeleteResponse(success=True)


@app.get("/summary", response_model=SummaryResponse)
def get_summary(db: Session = Depends(get_db)):
    try:
        rows = [serialize(row) for row in list_transactions(db)]
    except (PersistenceError, InvalidTransaction):
        logger.exception("Failed to build summary")
        raise HTTPException(status_code=500, detail="Unable to load transactions")
    return SummaryResponse(totals=compute_totals(rows), categories=category_breakdown(rows))


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    from config import get_settings
    from database import init_db
    from logger import setup_logging

    settings = get_settings()
    setup_logging(settings)
    init_db()
    uvicorn.run("api:app", host=settings.api_host, port=settings.api_port, reload=True)
