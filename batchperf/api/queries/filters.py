"""
Identity filter composition.

Filters are built as a small expression tree and handed unserialized to a
serializer (see odata.py), so query building never concatenates strings.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from .catalog import NODE_DIMENSION, POOL_DIMENSION


class Equals(BaseModel):
    """`field == value` predicate."""
    model_config = ConfigDict(frozen=True)

    field: str
    value: str


class And(BaseModel):
    """Both sub-expressions must hold."""
    model_config = ConfigDict(frozen=True)

    left: "FilterExpression"
    right: "FilterExpression"


FilterExpression = Union[Equals, And]
And.model_rebuild()


def compose_identity_filter(pool_id: str, node_id: Optional[str] = None) -> FilterExpression:
    """
    Predicate selecting telemetry of one pool, optionally narrowed to one node.

    Examples:
        >>> compose_identity_filter("pool1")
        Equals(field='cloud/roleName', value='pool1')
    """
    pool_filter = Equals(field=POOL_DIMENSION, value=pool_id)
    if node_id:
        node_filter = Equals(field=NODE_DIMENSION, value=node_id)
        return And(left=pool_filter, right=node_filter)
    return pool_filter
