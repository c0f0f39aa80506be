from fastapi import APIRouter, Depends
from typing import List

from pulse.schemas.task import Notification
from pulse.services.controller import Controller, get_controller

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=List[Notification])
def list_notifications(controller: Controller = Depends(get_controller)):
    """
    Tâches pending à surveiller: deadline dans les 24h (ou dépassée) ou isSerious.
    Chaque entrée porte un label: overdue, critical ou starting soon.
    """
    return controller.notifications()
