"""Mutation requests consumers issue back into the trip store.

The engine does not persist anything. These models only make the requests
representable; instance-level ones can be folded into overrides with
``packlist.engine.overrides.fold_mutations``.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from packlist.models.rules import DefaultItemRule


class TogglePacked(BaseModel):
    """Flip the packed state of one instance."""

    action: Literal["toggle_packed"] = "toggle_packed"
    instance_id: str


class OverrideQuantity(BaseModel):
    """Replace the computed quantity of one instance."""

    action: Literal["override_quantity"] = "override_quantity"
    instance_id: str
    quantity: int = Field(..., ge=0)


class ExcludeItem(BaseModel):
    """Drop one instance from totals and display."""

    action: Literal["exclude_item"] = "exclude_item"
    instance_id: str


class CreateRule(BaseModel):
    action: Literal["create_rule"] = "create_rule"
    rule: DefaultItemRule


class UpdateRule(BaseModel):
    action: Literal["update_rule"] = "update_rule"
    rule: DefaultItemRule


class DeleteRule(BaseModel):
    action: Literal["delete_rule"] = "delete_rule"
    rule_id: str


InstanceMutation = TogglePacked | OverrideQuantity | ExcludeItem

PackingListMutation = Annotated[
    TogglePacked | OverrideQuantity | ExcludeItem | CreateRule | UpdateRule | DeleteRule,
    Field(discriminator="action"),
]
