from fastapi import APIRouter, Depends, status
from typing import List

from pulse.schemas.goal import Goal, GoalDraft
from pulse.schemas.intent import Create, Edit
from pulse.services import planning_service
from pulse.services.controller import Controller, get_controller
from pulse.services.entity_lists import find_by_id

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("", response_model=List[Goal])
def list_goals(controller: Controller = Depends(get_controller)):
    return controller.data.goals


@router.post("", response_model=Goal, status_code=status.HTTP_201_CREATED)
def create_goal(draft: GoalDraft, controller: Controller = Depends(get_controller)):
    """
    plans accepte une liste ou un bloc de texte, une étape par ligne:
    {"title": "Run a marathon", "timeline": "2025", "plans": "Buy shoes\\n\\nTrain 3x/week"}
    → plans = ["Buy shoes", "Train 3x/week"]
    """
    data = controller.apply(planning_service.submit_goal, Create(), draft)
    return data.goals[-1]


@router.put("/{goal_id}", response_model=Goal)
def edit_goal(goal_id: str, draft: GoalDraft, controller: Controller = Depends(get_controller)):
    data = controller.apply(planning_service.submit_goal, Edit(goal_id), draft)
    return find_by_id(data.goals, goal_id, "Goal")


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_goal(goal_id: str, controller: Controller = Depends(get_controller)):
    controller.apply(planning_service.delete_goal, goal_id)
