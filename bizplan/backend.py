"""REST backend for agency business plans."""

from __future__ import annotations

import logging
import math
import os
from typing import Any, Dict, List

from flask import Flask, jsonify, request, send_file

from bizplan.config import settings
from bizplan.data_model import (
    AGENT_MODEL,
    AGGREGATE_MODEL,
    DERIVED_MODEL,
    TIME_FRAME_LABELS,
    BusinessPlan,
    SalesTargetInput,
    TableModel,
)
from bizplan.engine.derivation import derive_plan
from bizplan.engine.editor import PlanEditor, validate_plan
from bizplan.engine.errors import ValidationError
from bizplan.engine.state import PlanStore
from bizplan.engine.targets import derive_sales_targets
from bizplan.engine.timeframes import VARIANTS, get_variant
from bizplan.reports.exports import EXPORT_FORMATS, export_plan

logger = logging.getLogger(__name__)

app = Flask(__name__)

plan_store = PlanStore(settings.storage_path)


def _is_nan(value: Any) -> bool:
    try:
        return not math.isfinite(value)
    except (TypeError, ValueError):
        return False


def _sanitize_records(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    clean_rows: List[Dict[str, Any]] = []
    for row in records:
        clean_rows.append({key: (None if _is_nan(value) else value) for key, value in row.items()})
    return clean_rows


def _model_payload(model: TableModel) -> Dict[str, Any]:
    columns: List[Dict[str, Any]] = []
    for col in model.columns:
        columns.append(
            {
                "field": col.field,
                "label": col.label,
                "kind": col.kind,
                "scope": col.scope,
                "default": col.default,
                "options": col.options or [],
                "min": col.min_value,
                "max": col.max_value,
                "step": col.step,
                "readOnly": col.read_only,
                "help": col.help,
            }
        )
    defaults = _sanitize_records(model.create_default_df().to_dict("records"))
    return {"name": model.name, "columns": columns, "defaults": defaults}


def _time_frame_options(variant_name: str) -> List[Dict[str, Any]]:
    variant = get_variant(variant_name)
    return [
        {"label": TIME_FRAME_LABELS[key], "value": key, "multiplier": mult}
        for key, mult in variant.multipliers.items()
    ]


def _plan_payload(plan: BusinessPlan) -> Dict[str, Any]:
    return {"plan": plan.to_dict(), "projection": derive_plan(plan).to_dict()}


def _error(message: str, status: int, code: str = "BadRequest"):
    return jsonify({"error": code, "message": message}), status


def _parse_plan(payload: dict, owner_id: str | None = None) -> BusinessPlan:
    if "variant" not in payload:
        payload = {**payload, "variant": settings.default_variant}
    plan = BusinessPlan.from_dict(payload, owner_id=owner_id)
    validate_plan(plan)
    return plan


@app.after_request
def apply_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET,POST,DELETE,OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


@app.errorhandler(ValidationError)
def handle_validation_error(exc: ValidationError):
    return jsonify(exc.to_dict()), 422


@app.get("/api/health")
def healthcheck():
    return jsonify({"status": "ok"})


@app.get("/api/schema")
def get_schema():
    variant = request.args.get("variant", settings.default_variant)
    if variant not in VARIANTS:
        return _error(f"Unknown plan variant: {variant}", 400)
    payload = {
        "variant": variant,
        "variants": sorted(VARIANTS),
        "agents": _model_payload(AGENT_MODEL),
        "aggregate": _model_payload(AGGREGATE_MODEL),
        "derived": _model_payload(DERIVED_MODEL),
        "timeFrames": _time_frame_options(variant),
    }
    return jsonify(payload)


@app.get("/api/plans")
def list_saved_plans():
    return jsonify({"owners": plan_store.list_owners()})


@app.get("/api/plans/<owner_id>")
def get_plan(owner_id: str):
    plan = plan_store.get(owner_id)
    if plan is None:
        return _error("Plan not found.", 404, code="NotFound")
    return jsonify(_plan_payload(plan))


@app.post("/api/plans/<owner_id>")
def save_plan(owner_id: str):
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return _error("Plan payload must be a JSON object.", 400)
    try:
        plan = _parse_plan(payload, owner_id=owner_id)
    except ValidationError:
        raise
    except (TypeError, ValueError) as exc:
        return _error(str(exc), 400)
    plan_store.save(plan)
    return jsonify({"message": "Plan saved.", **_plan_payload(plan)})


@app.delete("/api/plans/<owner_id>")
def delete_plan(owner_id: str):
    if not plan_store.delete(owner_id):
        return _error("Plan not found.", 404, code="NotFound")
    return jsonify({"message": "Plan deleted.", "owners": plan_store.list_owners()})


@app.post("/api/plans/<owner_id>/inputs")
def update_plan_input(owner_id: str):
    plan = plan_store.get(owner_id)
    if plan is None:
        return _error("Plan not found.", 404, code="NotFound")
    payload = request.get_json(silent=True) or {}
    field = str(payload.get("field", "")).strip()
    if not field:
        return _error("Field name is required.", 400)
    editor = PlanEditor(plan)
    try:
        projection = editor.update_input(field, payload.get("value"), agent=payload.get("agent"))
    except ValidationError:
        raise
    except (TypeError, ValueError) as exc:
        return _error(f"Invalid value for {field}: {exc}", 400)
    plan_store.save(editor.plan)
    return jsonify({"plan": editor.plan.to_dict(), "projection": projection.to_dict()})


@app.post("/api/derive")
def derive_endpoint():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return _error("Plan payload must be a JSON object.", 400)
    try:
        plan = _parse_plan({"owner_id": "preview", **payload})
    except ValidationError:
        raise
    except (TypeError, ValueError) as exc:
        return _error(str(exc), 400)
    return jsonify(derive_plan(plan).to_dict())


@app.post("/api/targets")
def targets_endpoint():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return _error("Target payload must be a JSON object.", 400)
    try:
        inputs = SalesTargetInput.from_dict(payload)
    except (TypeError, ValueError) as exc:
        return _error(str(exc), 400)
    return jsonify(derive_sales_targets(inputs).to_dict())


@app.get("/api/plans/<owner_id>/export")
def export_plan_endpoint(owner_id: str):
    plan = plan_store.get(owner_id)
    if plan is None:
        return _error("Plan not found.", 404, code="NotFound")
    fmt = request.args.get("format", "csv").lower()
    if fmt not in EXPORT_FORMATS:
        return _error(f"Unsupported export format: {fmt}", 400)
    paths = export_plan(settings.export_dir, plan, derive_plan(plan), fmt=fmt)
    logger.info("Exported %s plan for %s as %s", plan.variant, owner_id, fmt)
    return send_file(os.path.abspath(paths[fmt]), as_attachment=True)


def main() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.run(debug=False, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
