from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from services.medical_dictionary import medical_lexicon

router = APIRouter()


@router.get("/")
async def list_terms(search: Optional[str] = None):
    records = medical_lexicon.search(search)
    return {
        "success": True,
        "count": len(records),
        "terms": [record.to_json() for record in records]
    }


@router.get("/{key}")
async def get_term(key: str):
    record = medical_lexicon.lookup(key)
    if not record:
        return JSONResponse(status_code=404, content={"success": False, "message": "Term not found"})
    return {"success": True, "term": record.to_json()}
