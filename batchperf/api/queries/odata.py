"""OData serialization of filter expressions, as the metrics API expects them."""

from .filters import And, Equals, FilterExpression


def _quote(value: str) -> str:
    # OData escapes a single quote by doubling it
    return "'" + value.replace("'", "''") + "'"


def to_odata(expression: FilterExpression) -> str:
    """
    Serialize a filter expression to an OData `$filter` string.

    Examples:
        >>> to_odata(Equals(field="cloud/roleName", value="pool1"))
        "cloud/roleName eq 'pool1'"
    """
    if isinstance(expression, Equals):
        return f"{expression.field} eq {_quote(expression.value)}"
    if isinstance(expression, And):
        return f"({to_odata(expression.left)} and {to_odata(expression.right)})"
    raise TypeError(f"unsupported filter expression: {type(expression).__name__}")
