from fastapi import APIRouter, Depends

from pulse.services.controller import Controller, get_controller

router = APIRouter()

@router.get("/z")
def healthz(controller: Controller = Depends(get_controller)):
    # Check si l'API est up et si la dernière écriture locale a réussi
    return {
        "status": "ok",
        "storage": "error" if controller.last_storage_error else "ok",
        "storage_error": controller.last_storage_error,
    }
