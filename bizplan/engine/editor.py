"""Stateful editing of a single business plan.

The editor owns one :class:`BusinessPlan`, validates every mutation against
the field schema, and re-derives the projection after each accepted change.
A rejected update leaves the plan exactly as it was.
"""
from __future__ import annotations

import logging
from dataclasses import fields, replace
from typing import Any, Optional

from ..data_model import (
    COMMISSION_SPLIT_FIELDS,
    FIELD_REGISTRY,
    AgentFinancialInput,
    BusinessPlan,
    FieldSpec,
    optional_number,
)
from .derivation import PlanProjection, derive_plan
from .errors import (
    CommissionSumExceeded,
    DuplicateAgent,
    PercentageOutOfRange,
    ReadOnlyField,
    UnknownAgent,
    UnknownField,
    ValidationError,
)
from .timeframes import get_variant

logger = logging.getLogger(__name__)

MAX_COMMISSION_SPLIT = 100.0


def _check_percentage(spec: FieldSpec, value: Optional[float]) -> None:
    if value is None or not spec.is_percentage:
        return
    if not spec.min_value <= value <= spec.max_value:
        raise PercentageOutOfRange(
            f"{spec.label} must be between {spec.min_value:g} and {spec.max_value:g} (got {value:g}).",
            field=spec.field,
        )


def _check_commission_split(agent: AgentFinancialInput, field: str, value: Optional[float]) -> None:
    if value is None or field not in COMMISSION_SPLIT_FIELDS:
        return
    other_field = next(name for name in COMMISSION_SPLIT_FIELDS if name != field)
    other = getattr(agent, other_field)
    if other is not None and value + other > MAX_COMMISSION_SPLIT:
        raise CommissionSumExceeded(
            f"Business and agent commission for {agent.name} would total {value + other:g}% (max 100%).",
            field=field,
        )


def validate_plan(plan: BusinessPlan) -> None:
    """Check a whole plan document, raising the first :class:`ValidationError`."""
    get_variant(plan.variant).multiplier(plan.aggregate.time_frame)
    for spec in FIELD_REGISTRY.values():
        if spec.scope == "aggregate" and spec.is_percentage:
            _check_percentage(spec, getattr(plan.aggregate, spec.field))
    seen: set[str] = set()
    for agent in plan.agents:
        if agent.name in seen:
            raise DuplicateAgent(f"Agent '{agent.name}' appears more than once.", field="name")
        seen.add(agent.name)
        for spec in FIELD_REGISTRY.values():
            if spec.scope == "agent" and spec.is_percentage:
                _check_percentage(spec, getattr(agent, spec.field))
        business_field = COMMISSION_SPLIT_FIELDS[0]
        _check_commission_split(agent, business_field, getattr(agent, business_field))


class PlanEditor:
    def __init__(self, plan: BusinessPlan) -> None:
        validate_plan(plan)
        self.plan = plan
        self.variant = get_variant(plan.variant)
        self.projection: PlanProjection = derive_plan(plan)

    def _refresh(self) -> PlanProjection:
        self.projection = derive_plan(self.plan)
        return self.projection

    def _agent(self, name: Optional[str]) -> AgentFinancialInput:
        agent = self.plan.find_agent(name) if name else None
        if agent is None:
            raise UnknownAgent(f"No agent named '{name}' in this plan.", field="name")
        return agent

    def _reject(self, exc: ValidationError) -> None:
        logger.info("Rejected update for plan %s: %s", self.plan.owner_id, exc)
        raise exc

    def update_input(self, field: str, value: Any, agent: Optional[str] = None) -> PlanProjection:
        spec = FIELD_REGISTRY.get(field)
        if spec is None:
            self._reject(UnknownField(f"Unknown plan field '{field}'.", field=field))
        if spec.read_only:
            self._reject(ReadOnlyField(f"{spec.label} is derived and cannot be edited.", field=field))
        if field == "time_frame":
            return self.set_time_frame(value)
        if field == "name":
            return self.rename_agent(agent, value)

        target = self._agent(agent) if spec.scope == "agent" else self.plan.aggregate
        number = optional_number(value)
        if spec.scope == "aggregate" and spec.is_percentage and number is None:
            number = 0.0
        try:
            _check_percentage(spec, number)
            if spec.scope == "agent":
                _check_commission_split(target, field, number)
        except ValidationError as exc:
            self._reject(exc)

        setattr(target, field, number)
        return self._refresh()

    def set_time_frame(self, time_frame: str) -> PlanProjection:
        key = str(time_frame or "").strip().lower()
        try:
            self.variant.multiplier(key)
        except ValidationError as exc:
            self._reject(exc)
        self.plan.aggregate.time_frame = key
        return self._refresh()

    def add_agent(self, name: str, **values: Any) -> PlanProjection:
        name = str(name or "").strip()
        if not name:
            self._reject(ValidationError("Agent name is required.", field="name"))
        if self.plan.find_agent(name) is not None:
            self._reject(DuplicateAgent(f"Agent '{name}' already exists.", field="name"))
        candidate = AgentFinancialInput.from_dict({"name": name, **values})
        probe = replace(self.plan, agents=[candidate])
        try:
            validate_plan(probe)
        except ValidationError as exc:
            self._reject(exc)
        self.plan.agents.append(candidate)
        return self._refresh()

    def remove_agent(self, name: str) -> PlanProjection:
        agent = self._agent(name)
        self.plan.agents.remove(agent)
        return self._refresh()

    def rename_agent(self, name: Optional[str], new_name: Any) -> PlanProjection:
        agent = self._agent(name)
        new_name = str(new_name or "").strip()
        if not new_name:
            self._reject(ValidationError("Agent name is required.", field="name"))
        if new_name != agent.name and self.plan.find_agent(new_name) is not None:
            self._reject(DuplicateAgent(f"Agent '{new_name}' already exists.", field="name"))
        agent.name = new_name
        return self._refresh()

    def populate_uniform_agents(self, count: int, template: Optional[dict] = None) -> PlanProjection:
        """Replace the agent list with ``Agent 1 .. Agent N`` sharing one set of inputs."""
        count = int(count)
        if count < 0:
            self._reject(ValidationError("Number of agents cannot be negative.", field="number_of_agents"))
        template = {
            f.name: (template or {}).get(f.name)
            for f in fields(AgentFinancialInput)
            if f.name != "name"
        }
        agents = [AgentFinancialInput.from_dict({"name": f"Agent {i}", **template}) for i in range(1, count + 1)]
        try:
            validate_plan(replace(self.plan, agents=agents[:1]))
        except ValidationError as exc:
            self._reject(exc)
        self.plan.agents = agents
        return self._refresh()
