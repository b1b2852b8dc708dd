"""FastAPI server for parsing OCR receipt text."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from receiptparse.receipt.store_rules import StoreRulesError
from receiptparse.receipt.text_parser import parse_receipt_text
from receiptparse.runtime import get_logger, load_store_rules

logger = get_logger(__name__)


class ParseRequest(BaseModel):
    """Body of POST /parse: the full OCR text of one receipt."""

    text: str


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load store rules on startup so a broken config fails early."""
    try:
        rules = load_store_rules()
        logger.info("Loaded %d store rule(s)", len(rules))
    except StoreRulesError as exc:
        logger.error("Invalid store rules: %s", exc)
    yield


app = FastAPI(title="Receipt Parser", lifespan=lifespan)


@app.post("/parse")
async def parse(request: ParseRequest) -> Any:
    """Parse receipt text and return the structured receipt as JSON."""
    try:
        store_rules = load_store_rules()
    except StoreRulesError as exc:
        logger.error("Invalid store rules: %s", exc)
        return JSONResponse({"status": "error", "message": str(exc)}, status_code=500)

    receipt = parse_receipt_text(request.text, store_rules=store_rules)
    logger.info(
        "Parsed: %s, %s, $%.2f, %d items",
        receipt.store_name or "unknown store",
        receipt.purchase_date.isoformat(),
        receipt.total_amount,
        len(receipt.items),
    )
    return receipt.to_dict()


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
