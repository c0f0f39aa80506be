"""
Router pour la synchronisation GitHub.

Endpoints:
- GET  /sync/config - coordonnées du dépôt (jamais le token)
- PUT  /sync/config - enregistrer token / owner / repo / path
- POST /sync/save   - pousser le document complet
- POST /sync/fetch  - remplacer le document local par la version distante
"""

from fastapi import APIRouter, Depends, HTTPException, status

from pulse.core.errors import SyncOutcome, SyncResult
from pulse.schemas.sync import SyncConfig, SyncConfigView, SyncResponse
from pulse.services.controller import Controller, get_controller

router = APIRouter(prefix="/sync", tags=["sync"])


def _to_response(result: SyncResult, controller: Controller, with_data: bool = False) -> SyncResponse:
    if result.outcome == SyncOutcome.BUSY:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A sync is already running")
    if result.outcome == SyncOutcome.FAILED:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Sync failed. Check your token and repository details. ({result.reason})"
        )
    if result.outcome == SyncOutcome.NOT_CONFIGURED:
        # pas une erreur: l'utilisateur doit compléter la config
        return SyncResponse(outcome=result.outcome.value, detail="Sync is not configured")

    return SyncResponse(
        outcome=result.outcome.value,
        last_sync=controller.data.last_sync,
        data=controller.data if with_data else None,
    )


@router.get("/config", response_model=SyncConfigView)
def get_config(controller: Controller = Depends(get_controller)):
    return SyncConfigView.from_config(controller.config)


@router.put("/config", response_model=SyncConfigView)
def update_config(config: SyncConfig, controller: Controller = Depends(get_controller)):
    return SyncConfigView.from_config(controller.update_config(config))


@router.post("/save", response_model=SyncResponse)
def save(controller: Controller = Depends(get_controller)):
    return _to_response(controller.save_remote(), controller)


@router.post("/fetch", response_model=SyncResponse)
def fetch(controller: Controller = Depends(get_controller)):
    return _to_response(controller.fetch_remote(), controller, with_data=True)
