"""
RecipeBox SQL Helpers
Builds parameterized fragments for partial record updates
"""

from typing import Any, Dict, List, Sequence, Tuple

from core.exceptions import BadRequestError


def sql_for_partial_update(
    data_to_update: Dict[str, Any],
    js_to_sql: Dict[str, str]
) -> Tuple[str, List[Any]]:
    """
    Build the SET clause of a partial UPDATE

    Args:
        data_to_update: field name -> new value, only the fields to change
        js_to_sql: field name -> column name, for fields whose column differs

    Returns:
        ('"first_name"=:p1, "is_admin"=:p2', ["Aliya", True])

    Placeholders follow the insertion order of ``data_to_update``. Callers
    append trailing parameters (e.g. the row id) as ``:p{len(values) + 1}``.

    Field names are interpolated as column names, so callers must restrict
    ``data_to_update`` to an allow-list first.
    """
    keys = list(data_to_update.keys())
    if not keys:
        raise BadRequestError("No data")

    cols = [
        f'"{js_to_sql.get(col_name, col_name)}"=:p{idx}'
        for idx, col_name in enumerate(keys, start=1)
    ]

    return ", ".join(cols), list(data_to_update.values())


def bind_params(values: Sequence[Any]) -> Dict[str, Any]:
    """Map ordered values onto the p1..pN placeholders"""
    return {f"p{idx}": value for idx, value in enumerate(values, start=1)}
