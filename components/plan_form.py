# components/plan_form.py
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dash_table, dcc, html

from bizplan.data_model import AGENT_MODEL, AGGREGATE_MODEL, DERIVED_MODEL, TIME_FRAME_LABELS, TableModel
from bizplan.engine.timeframes import get_variant


def _table_config(model: TableModel):
    columns = []
    for col in model.columns:
        col_def = {"name": col.label, "id": col.field, "editable": not col.read_only}
        if col.is_numeric:
            col_def["type"] = "numeric"
        columns.append(col_def)
    return columns


AGENT_COLUMNS = _table_config(AGENT_MODEL)
DERIVED_COLUMNS = _table_config(DERIVED_MODEL)


def time_frame_options(variant_name: str) -> list[dict]:
    variant = get_variant(variant_name)
    return [{"label": TIME_FRAME_LABELS[key], "value": key} for key in variant.time_frames]


def _datatable(id_value: str, data, columns, editable: bool):
    table = dash_table.DataTable(
        id=id_value,
        data=data,
        columns=columns,
        editable=editable,
        row_deletable=editable,
        style_table={"height": "auto", "overflowY": "visible"},
        style_header={"backgroundColor": "#1e3a8a", "color": "#eff6ff", "fontWeight": "bold"},
        style_data={"backgroundColor": "#eff6ff", "color": "#1e3a8a"},
        fill_width=True,
    )
    return html.Div(table, style={"maxHeight": "320px", "overflowY": "auto"})


def _percentage_slider(col):
    return html.Div(
        [
            dbc.Label(
                [
                    f"{col.label} ",
                    html.Span(f"{col.default or 0:g}%", id=f"{col.field}-display", className="badge bg-info text-dark ms-2"),
                ]
            ),
            dcc.Slider(
                id=col.field,
                min=col.min_value,
                max=col.max_value,
                value=col.default or 0,
                step=col.step,
                marks={i: f"{i}%" for i in range(0, 101, 25)},
                tooltip={"placement": "bottom", "always_visible": False},
            ),
        ],
        title=col.help or "",
    )


def _amount_input(col):
    return html.Div(
        [
            dbc.Label(col.label),
            dbc.Input(id=col.field, type="number", min=col.min_value, step=col.step, value=col.default),
        ]
    )


def build_aggregate_controls(variant_name: str = "admin"):
    variant = get_variant(variant_name)
    controls = []
    for col in AGGREGATE_MODEL.columns:
        if col.kind == "percentage":
            controls.append(_percentage_slider(col))
        elif col.kind == "amount":
            controls.append(_amount_input(col))
        elif col.field == "time_frame":
            controls.append(dbc.Label("Time Frame"))
            controls.append(
                dcc.RadioItems(
                    id="time_frame",
                    options=time_frame_options(variant_name),
                    value=variant.default_time_frame,
                    inline=True,
                )
            )
    return controls


def build_plan_form(variant_name: str = "admin"):
    return dbc.Card(
        [
            html.H4(f"{variant_name.title()} Business Plan", className="card-title"),
            *build_aggregate_controls(variant_name),

            html.Hr(),
            html.H5("Agents"),
            _datatable("agents-table", AGENT_MODEL.create_default_df().to_dict("records"), AGENT_COLUMNS, editable=True),
            dbc.Button("Add Agent", id="add-agent-row", color="secondary", size="sm", className="mt-2"),

            html.Hr(),
            html.H5("Projection"),
            _datatable("projection-table", [], DERIVED_COLUMNS, editable=False),

            html.Hr(),
            dbc.Button("Save Plan", id="save-plan-btn", color="primary", className="mt-2 w-100"),
        ],
        body=True,
    )


def model_blank_row(model: TableModel, name: str = ""):
    """Return an empty row using the column defaults for the model."""
    row = {col.field: col.default for col in model.columns}
    if "name" in row:
        row["name"] = name
    return row


__all__ = [
    "AGENT_COLUMNS",
    "DERIVED_COLUMNS",
    "build_aggregate_controls",
    "build_plan_form",
    "model_blank_row",
    "time_frame_options",
]
