"""
Router du dossier (informations personnelles).

Endpoints:
- /dossier/categories                                   catégories
- /dossier/categories/{cid}/items                       items d'une catégorie
- /dossier/categories/{cid}/items/{iid}/sub-items       détails d'un item
- /dossier/export                                       tout le dossier en texte brut
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from typing import List

from pulse.schemas.dossier import NameRequest, PersonalCategory, PersonalItem, PersonalSubItem, SubItemDraft
from pulse.schemas.intent import Create, Edit
from pulse.services import dossier_service
from pulse.services.controller import Controller, get_controller
from pulse.services.entity_lists import find_by_id

router = APIRouter(prefix="/dossier", tags=["dossier"])


def _category(data, category_id: str) -> PersonalCategory:
    return find_by_id(data.personal_categories, category_id, "PersonalCategory")


def _item(data, category_id: str, item_id: str) -> PersonalItem:
    return find_by_id(_category(data, category_id).items, item_id, "PersonalItem")

#CATEGORIES

@router.get("/categories", response_model=List[PersonalCategory])
def list_categories(controller: Controller = Depends(get_controller)):
    return controller.data.personal_categories


@router.post("/categories", response_model=PersonalCategory, status_code=status.HTTP_201_CREATED)
def create_category(request: NameRequest, controller: Controller = Depends(get_controller)):
    data = controller.apply(dossier_service.submit_category, Create(), request.name)
    return data.personal_categories[-1]


@router.put("/categories/{category_id}", response_model=PersonalCategory)
def rename_category(category_id: str, request: NameRequest, controller: Controller = Depends(get_controller)):
    data = controller.apply(dossier_service.submit_category, Edit(category_id), request.name)
    return _category(data, category_id)


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: str, controller: Controller = Depends(get_controller)):
    # supprime aussi tous les items et sous-items
    controller.apply(dossier_service.delete_category, category_id)

#ITEMS

@router.post("/categories/{category_id}/items", response_model=PersonalItem, status_code=status.HTTP_201_CREATED)
def create_item(category_id: str, request: NameRequest, controller: Controller = Depends(get_controller)):
    data = controller.apply(dossier_service.submit_item, category_id, Create(), request.name)
    return _category(data, category_id).items[-1]


@router.put("/categories/{category_id}/items/{item_id}", response_model=PersonalItem)
def rename_item(category_id: str, item_id: str, request: NameRequest, controller: Controller = Depends(get_controller)):
    data = controller.apply(dossier_service.submit_item, category_id, Edit(item_id), request.name)
    return _item(data, category_id, item_id)


@router.delete("/categories/{category_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(category_id: str, item_id: str, controller: Controller = Depends(get_controller)):
    controller.apply(dossier_service.delete_item, category_id, item_id)

#SOUS-ITEMS

@router.post(
    "/categories/{category_id}/items/{item_id}/sub-items",
    response_model=PersonalSubItem,
    status_code=status.HTTP_201_CREATED,
)
def create_sub_item(
    category_id: str,
    item_id: str,
    draft: SubItemDraft,
    controller: Controller = Depends(get_controller)
):
    data = controller.apply(dossier_service.submit_sub_item, category_id, item_id, Create(), draft)
    return _item(data, category_id, item_id).sub_items[-1]


@router.put("/categories/{category_id}/items/{item_id}/sub-items/{sub_item_id}", response_model=PersonalSubItem)
def edit_sub_item(
    category_id: str,
    item_id: str,
    sub_item_id: str,
    draft: SubItemDraft,
    controller: Controller = Depends(get_controller)
):
    data = controller.apply(dossier_service.submit_sub_item, category_id, item_id, Edit(sub_item_id), draft)
    return find_by_id(_item(data, category_id, item_id).sub_items, sub_item_id, "PersonalSubItem")


@router.delete(
    "/categories/{category_id}/items/{item_id}/sub-items/{sub_item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_sub_item(
    category_id: str,
    item_id: str,
    sub_item_id: str,
    controller: Controller = Depends(get_controller)
):
    controller.apply(dossier_service.delete_sub_item, category_id, item_id, sub_item_id)

#EXPORT

@router.get("/export", response_class=PlainTextResponse)
def export_dossier(controller: Controller = Depends(get_controller)):
    return dossier_service.export_dossier_text(controller.data.personal_categories)
