"""Visions et objectifs: mêmes commandes Create/Edit/delete que les tâches"""

from pulse.schemas.app_data import AppData
from pulse.schemas.goal import Goal, GoalDraft
from pulse.schemas.intent import Edit, Intent
from pulse.schemas.vision import Vision, VisionDraft
from pulse.services.entity_lists import find_by_id, remove_by_id, replace_by_id


# func 1: visions

def submit_vision(data: AppData, intent: Intent, draft: VisionDraft) -> AppData:
    if isinstance(intent, Edit):
        updated = find_by_id(data.visions, intent.id, "Vision").replace(**draft.model_dump())
        visions = replace_by_id(data.visions, updated, "Vision")
    else:
        visions = [*data.visions, Vision(**draft.model_dump())]
    return data.model_copy(update={"visions": visions})


def delete_vision(data: AppData, vision_id: str) -> AppData:
    return data.model_copy(update={"visions": remove_by_id(data.visions, vision_id, "Vision")})


# func 2: objectifs

def submit_goal(data: AppData, intent: Intent, draft: GoalDraft) -> AppData:
    if isinstance(intent, Edit):
        updated = find_by_id(data.goals, intent.id, "Goal").replace(**draft.model_dump())
        goals = replace_by_id(data.goals, updated, "Goal")
    else:
        goals = [*data.goals, Goal(**draft.model_dump())]
    return data.model_copy(update={"goals": goals})


def delete_goal(data: AppData, goal_id: str) -> AppData:
    return data.model_copy(update={"goals": remove_by_id(data.goals, goal_id, "Goal")})
