"""
Import endpoint: upload a CSV/XLSX/XLS export and create its transactions.
Rows that cannot be read are reported back with their line numbers.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from fintrack.config import MAX_UPLOAD_BYTES
from fintrack.data.loader import check_upload, import_file
from fintrack.data.store import LedgerStore
from fintrack.api.dependencies import get_current_user_id, get_store
from fintrack.api.response_models import ImportResponse, ImportRowError
from fintrack.errors import ImportFileError

router = APIRouter(prefix="/api", tags=["import"])


@router.post("/import", response_model=ImportResponse, status_code=201)
async def import_transactions(
    file: UploadFile | None = File(None),
    store: LedgerStore = Depends(get_store),
    user_id: int = Depends(get_current_user_id),
):
    """Import one spreadsheet. Partial success is normal; see `errors`."""
    if file is None or not file.filename:
        raise HTTPException(400, "Nenhum arquivo enviado")

    # At most cap + 1 bytes are read; a longer read means the file is over the limit
    content = await file.read(MAX_UPLOAD_BYTES + 1)
    try:
        check_upload(file.filename, len(content))
        # Parsing and the per-user store lock stay off the event loop
        result = await run_in_threadpool(import_file, store, user_id, content, file.filename)
    except ImportFileError as exc:
        raise HTTPException(400, f"Erro ao importar arquivo: {exc.message}")

    return ImportResponse(
        message=f"{result.count} transações importadas com sucesso",
        count=result.count,
        errors=[ImportRowError(line=e.line, message=e.message) for e in result.errors],
    )
