from fastapi import APIRouter, Depends, status
from typing import List

from pulse.schemas.intent import Create, Edit
from pulse.schemas.vision import Vision, VisionDraft
from pulse.services import planning_service
from pulse.services.controller import Controller, get_controller
from pulse.services.entity_lists import find_by_id

router = APIRouter(prefix="/visions", tags=["visions"])


@router.get("", response_model=List[Vision])
def list_visions(controller: Controller = Depends(get_controller)):
    return controller.data.visions


@router.post("", response_model=Vision, status_code=status.HTTP_201_CREATED)
def create_vision(draft: VisionDraft, controller: Controller = Depends(get_controller)):
    data = controller.apply(planning_service.submit_vision, Create(), draft)
    return data.visions[-1]


@router.put("/{vision_id}", response_model=Vision)
def edit_vision(vision_id: str, draft: VisionDraft, controller: Controller = Depends(get_controller)):
    data = controller.apply(planning_service.submit_vision, Edit(vision_id), draft)
    return find_by_id(data.visions, vision_id, "Vision")


@router.delete("/{vision_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_vision(vision_id: str, controller: Controller = Depends(get_controller)):
    controller.apply(planning_service.delete_vision, vision_id)
