from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from app.services.base import PreferenceStoreError
from app.services.dependencies import OwnerDep, PreferenceServiceDep

router = APIRouter()


class SheetIdPreference(BaseModel):
	sheet_id: Optional[str] = None


@router.get("/sheet-id", response_model=SheetIdPreference, summary="读取已保存的 spreadsheet ID")
async def get_sheet_id(owner: OwnerDep = None, preferences: PreferenceServiceDep = None):
	try:
		return SheetIdPreference(sheet_id=await preferences.get_sheet_id(owner))
	except PreferenceStoreError as e:
		raise HTTPException(status_code=503, detail=e.message)


@router.put("/sheet-id", response_model=SheetIdPreference, summary="保存 spreadsheet ID")
async def put_sheet_id(
	body: SheetIdPreference,
	owner: OwnerDep = None,
	preferences: PreferenceServiceDep = None,
):
	try:
		return SheetIdPreference(sheet_id=await preferences.set_sheet_id(body.sheet_id, owner))
	except PreferenceStoreError as e:
		raise HTTPException(status_code=503, detail=e.message)
