"""
Service dossier - arbre PersonalCategory -> PersonalItem -> PersonalSubItem

Chaque commande renvoie une nouvelle liste de catégories.
La suppression passe par prune_dossier: une seule réécriture de l'arbre,
le sous-arbre du noeud supprimé part avec lui.
"""

from typing import List, Optional

from pulse.core.errors import NotFoundError
from pulse.schemas.app_data import AppData
from pulse.schemas.dossier import PersonalCategory, PersonalItem, PersonalSubItem, SubItemDraft
from pulse.schemas.intent import Edit, Intent
from pulse.services.entity_lists import find_by_id, replace_by_id

SEPARATOR = "\n========================\n\n"


def _with_categories(data: AppData, categories: List[PersonalCategory]) -> AppData:
    return data.model_copy(update={"personal_categories": categories})


def _rewrite_category(data: AppData, category_id: str, rewrite) -> AppData:
    category = find_by_id(data.personal_categories, category_id, "PersonalCategory")
    return _with_categories(
        data, replace_by_id(data.personal_categories, rewrite(category), "PersonalCategory")
    )


def submit_category(data: AppData, intent: Intent, name: str) -> AppData:
    if isinstance(intent, Edit):
        return _rewrite_category(data, intent.id, lambda c: c.replace(name=name))
    return _with_categories(data, [*data.personal_categories, PersonalCategory(name=name)])


def submit_item(data: AppData, category_id: str, intent: Intent, name: str) -> AppData:
    def rewrite(category: PersonalCategory) -> PersonalCategory:
        if isinstance(intent, Edit):
            item = find_by_id(category.items, intent.id, "PersonalItem").replace(name=name)
            items = replace_by_id(category.items, item, "PersonalItem")
        else:
            items = [*category.items, PersonalItem(name=name)]
        return category.model_copy(update={"items": items})

    return _rewrite_category(data, category_id, rewrite)


def submit_sub_item(
    data: AppData, category_id: str, item_id: str, intent: Intent, draft: SubItemDraft
) -> AppData:
    def rewrite_item(item: PersonalItem) -> PersonalItem:
        if isinstance(intent, Edit):
            sub = find_by_id(item.sub_items, intent.id, "PersonalSubItem").replace(**draft.model_dump())
            subs = replace_by_id(item.sub_items, sub, "PersonalSubItem")
        else:
            subs = [*item.sub_items, PersonalSubItem(**draft.model_dump())]
        return item.model_copy(update={"sub_items": subs})

    def rewrite(category: PersonalCategory) -> PersonalCategory:
        item = rewrite_item(find_by_id(category.items, item_id, "PersonalItem"))
        return category.model_copy(update={"items": replace_by_id(category.items, item, "PersonalItem")})

    return _rewrite_category(data, category_id, rewrite)


def prune_dossier(
    categories: List[PersonalCategory],
    category_id: str,
    item_id: Optional[str] = None,
    sub_item_id: Optional[str] = None,
) -> List[PersonalCategory]:
    """Remove the deepest node addressed by the ids, with everything it owns."""
    found = False
    result = []
    for category in categories:
        if category.id != category_id:
            result.append(category)
            continue
        if item_id is None:
            found = True
            continue

        items = []
        for item in category.items:
            if item.id != item_id:
                items.append(item)
                continue
            if sub_item_id is None:
                found = True
                continue
            subs = [s for s in item.sub_items if s.id != sub_item_id]
            found = found or len(subs) != len(item.sub_items)
            items.append(item.model_copy(update={"sub_items": subs}))
        result.append(category.model_copy(update={"items": items}))

    if not found:
        kind, missing = (
            ("PersonalSubItem", sub_item_id) if sub_item_id
            else ("PersonalItem", item_id) if item_id
            else ("PersonalCategory", category_id)
        )
        raise NotFoundError(kind, missing)
    return result


def delete_category(data: AppData, category_id: str) -> AppData:
    return _with_categories(data, prune_dossier(data.personal_categories, category_id))


def delete_item(data: AppData, category_id: str, item_id: str) -> AppData:
    return _with_categories(data, prune_dossier(data.personal_categories, category_id, item_id))


def delete_sub_item(data: AppData, category_id: str, item_id: str, sub_item_id: str) -> AppData:
    return _with_categories(
        data, prune_dossier(data.personal_categories, category_id, item_id, sub_item_id)
    )


def export_dossier_text(categories: List[PersonalCategory]) -> str:
    blocks = []
    for category in categories:
        items_text = "\n\n".join(
            f"[Item] {item.name}\n" + "\n".join(f"  {s.heading}: {s.value}" for s in item.sub_items)
            for item in category.items
        )
        blocks.append(f"### CATEGORY: {category.name.upper()} ###\n{items_text}\n")
    return SEPARATOR.join(blocks)
